# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from voucher_ingest.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
header_aliases:
  vendor: supplierLedger
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_excel(temp_workdir: Path):
    """Factory writing a workbook whose sheets contain the given rows verbatim (first row = header)."""
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        path = temp_workdir / "data" / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                df = pd.DataFrame(rows)
                df.to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _make


@pytest.fixture()
def make_csv(temp_workdir: Path):
    def _make(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _make
