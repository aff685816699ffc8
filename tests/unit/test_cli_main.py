from __future__ import annotations

import json
from pathlib import Path

from voucher_ingest.cli.__main__ import (
    CONFIG_ENV_VAR,
    EXIT_FATAL,
    EXIT_PARTIAL_FAILURE,
    EXIT_SUCCESS_ALL,
    main,
)

GOOD_CSV = "date,supplier,purchaseaccount,amount\n2024-01-15,Acme Traders,Office Purchases,1000\n"
BAD_CSV = "date,supplier,purchaseaccount,amount\n,Acme Traders,Office Purchases,1000\n"


def test_all_files_succeed(write_config: Path, make_csv, capsys):
    make_csv("good.csv", GOOD_CSV)
    assert main([]) == EXIT_SUCCESS_ALL
    out = capsys.readouterr().out
    assert "INFO good.csv: Detected single-entry schema: 1 vouchers" in out
    assert "SUMMARY files=1/1 success=1 failed=0 vouchers=1 errors=0" in out
    assert not Path("logs").exists()


def test_partial_failure(write_config: Path, make_csv, capsys):
    make_csv("good.csv", GOOD_CSV)
    make_csv("bad.csv", BAD_CSV)
    assert main([]) == EXIT_PARTIAL_FAILURE
    out = capsys.readouterr().out
    assert "ERROR bad.csv row=2 column=date Missing required field: date" in out
    assert "SUMMARY files=2/2 success=1 failed=1 vouchers=1 errors=1" in out
    logs = list(Path("logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["file"] == "bad.csv"
    assert record["column"] == "date"


def test_explicit_file_arguments(temp_workdir: Path, make_csv, capsys):
    path = make_csv("good.csv", GOOD_CSV)
    assert main([str(path)]) == EXIT_SUCCESS_ALL
    assert "SUMMARY files=1/1" in capsys.readouterr().out


def test_missing_file_argument_is_a_failed_file(temp_workdir: Path, capsys):
    assert main(["nope.xlsx"]) == EXIT_PARTIAL_FAILURE
    assert "ERROR nope.xlsx row=0 File not found: nope.xlsx" in capsys.readouterr().out


def test_json_output(temp_workdir: Path, make_csv, capsys):
    path = make_csv("good.csv", GOOD_CSV)
    assert main(["--json", str(path)]) == EXIT_SUCCESS_ALL
    out = capsys.readouterr().out
    payload = json.loads(out[out.index("{"): out.index("\nSUMMARY")])
    assert payload["file"] == "good.csv"
    assert payload["success"] is True
    assert payload["vouchers"][0]["totalAmount"] == 1000
    assert payload["errors"] == []


def test_sheet_option_overrides_config(temp_workdir: Path, make_csv, capsys):
    path = make_csv("good.csv", GOOD_CSV)
    assert main(["--sheet", "Purchases", str(path)]) == EXIT_PARTIAL_FAILURE
    assert 'Sheet "Purchases" not found. Available: Sheet1' in capsys.readouterr().out


def test_invalid_config_is_fatal(write_config: Path, capsys):
    write_config.write_text("unknown_key: 1\n", encoding="utf-8")
    assert main([]) == EXIT_FATAL
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_config_from_environment(temp_workdir: Path, make_csv, monkeypatch, capsys):
    cfg = temp_workdir / "other.yml"
    cfg.write_text("source_directory: ./data\nheader_aliases:\n  vendor: supplierLedger\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(cfg))
    make_csv("vendor.csv", "date,vendor,purchaseaccount,amount\n2024-01-15,Acme,Purchases,10\n")
    assert main([]) == EXIT_SUCCESS_ALL
    assert "vouchers=1" in capsys.readouterr().out


def test_no_paths_and_no_source_directory(temp_workdir: Path, capsys):
    assert main([]) == EXIT_FATAL
    assert "no source_directory configured" in capsys.readouterr().out


def test_missing_source_directory(write_config: Path, capsys):
    write_config.write_text("source_directory: ./missing\n", encoding="utf-8")
    assert main([]) == EXIT_FATAL
    assert "Directory not found" in capsys.readouterr().out
