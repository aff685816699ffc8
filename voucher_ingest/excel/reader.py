from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.cells import is_blank
from ..models.row_data import RawRow

"""Workbook reader for voucher files.

Row 1 of the sheet is the header row, data rows start at row 2. Reported row
numbers are positions in the sheet as pandas returns it (header = 1).

Reading is split in two steps so callers can tell failures apart:
``read_sheet`` opens the file and selects the sheet (decode errors surface as
whatever pandas/openpyxl/xlrd raise, a missing sheet as SheetNotFoundError),
``normalize_sheet`` turns the raw DataFrame into header + RawRows and raises
EmptySheetError when nothing is left.

Pandas' default NA strings ("NA", "null", "N/A", ...) are kept as text: a
ledger may well be called "NA".
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "CSV_SHEET_NAME",
    "WorkbookReadError",
    "SheetNotFoundError",
    "EmptySheetError",
    "SheetData",
    "is_supported_file",
    "read_sheet",
    "normalize_sheet",
]

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".xlsx", ".xls", ".csv")

# A CSV file behaves like a workbook with a single sheet of this name
CSV_SHEET_NAME = "Sheet1"


class WorkbookReadError(Exception):
    """Base class for reader failures that are reported with a fixed message."""


class SheetNotFoundError(WorkbookReadError):
    """Raised when the requested sheet does not exist in the workbook."""

    def __init__(self, sheet_name: str, available: list[str]) -> None:
        self.sheet_name = sheet_name
        self.available = available
        super().__init__(f'Sheet "{sheet_name}" not found. Available: {", ".join(available)}')


class EmptySheetError(WorkbookReadError):
    """Raised when the sheet has no header row or no non-blank data rows."""


@dataclass(frozen=True)
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[RawRow]


def is_supported_file(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def _csv_width(path: Path) -> int:
    """Number of fields in the widest record of a CSV file (0 when it has none)."""
    with path.open(newline="", encoding="utf-8-sig") as f:
        return max((len(record) for record in csv.reader(f)), default=0)


def read_sheet(path: Path, sheet_name: str | None = None) -> tuple[str, pd.DataFrame]:
    """Open ``path`` and return ``(sheet name, raw DataFrame)`` without headers applied.

    Parameters
    ----------
    path: .xlsx / .xls / .csv file
    sheet_name: sheet to read; None selects the first sheet in document order
    """
    if path.suffix.lower() == ".csv":
        target = sheet_name or CSV_SHEET_NAME
        if target != CSV_SHEET_NAME:
            raise SheetNotFoundError(target, [CSV_SHEET_NAME])
        # Records may be longer than the header (trailing commas)
        width = _csv_width(path)
        if width == 0:
            return target, pd.DataFrame()
        df = pd.read_csv(
            path,
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig",
        )
        return target, df

    with pd.ExcelFile(path) as xls:
        names = [str(name) for name in xls.sheet_names]
        target = sheet_name or names[0]
        if target not in names:
            raise SheetNotFoundError(target, names)
        df = xls.parse(target, header=None, keep_default_na=False)
    return target, df


def _cell_value(value: Any) -> Any:
    """Convert pandas/numpy cell objects to plain Python values (None for NA)."""
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return _cell_value(value.item())
    return value


def _header_names(header_row: list[Any]) -> list[str]:
    """Header cells as text, with pandas-style names for blanks and duplicates."""
    columns: list[str] = []
    seen: dict[str, int] = {}
    for position, cell in enumerate(header_row):
        value = _cell_value(cell)
        if is_blank(value):
            name = f"Unnamed: {position}"
        elif isinstance(value, float) and value.is_integer():
            name = str(int(value))
        else:
            name = str(value).strip()
        if name in seen:
            seen[name] += 1
            name = f"{name}.{seen[name]}"
        else:
            seen[name] = 0
        columns.append(name)
    return columns


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> SheetData:
    """Split a raw DataFrame into header names and RawRows.

    Steps:
    1. Validate at least one row exists (the header)
    2. Take header names from the first row
    3. Build one RawRow per remaining row, skipping rows where every cell is blank
    4. Validate at least one data row is left
    """
    if df.shape[0] < 1:
        raise EmptySheetError(f"sheet '{sheet_name}' has no header row")
    columns = _header_names(df.iloc[0].tolist())
    rows: list[RawRow] = []
    for offset, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None)):
        values = [_cell_value(v) for v in raw]
        if all(is_blank(v) for v in values):
            continue
        rows.append(RawRow(row_number=offset + 2, values=dict(zip(columns, values, strict=False))))
    if not rows:
        raise EmptySheetError(f"sheet '{sheet_name}' has no data rows")
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
