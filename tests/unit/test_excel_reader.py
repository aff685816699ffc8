from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from voucher_ingest.excel.reader import (
    CSV_SHEET_NAME,
    EmptySheetError,
    SheetNotFoundError,
    is_supported_file,
    normalize_sheet,
    read_sheet,
)


def test_read_first_sheet_by_default(make_excel):
    excel = make_excel(
        "book.xlsx",
        {
            "Purchases": [["date", "amount"], ["2024-01-15", 1000]],
            "Other": [["x"], [1]],
        },
    )
    name, df = read_sheet(excel)
    assert name == "Purchases"
    sheet = normalize_sheet(df, name)
    assert sheet.columns == ["date", "amount"]
    assert len(sheet.rows) == 1
    assert sheet.rows[0].row_number == 2
    assert sheet.rows[0].values == {"date": "2024-01-15", "amount": 1000}


def test_read_named_sheet(make_excel):
    excel = make_excel("book.xlsx", {"A": [["c1"], [1]], "B": [["c1"], [2]]})
    name, df = read_sheet(excel, "B")
    assert name == "B"
    assert normalize_sheet(df, name).rows[0].values == {"c1": 2}


def test_missing_sheet_lists_available_sheets(make_excel):
    excel = make_excel("book.xlsx", {"A": [["c1"], [1]], "B": [["c1"], [2]]})
    with pytest.raises(SheetNotFoundError) as e:
        read_sheet(excel, "Purchases")
    assert str(e.value) == 'Sheet "Purchases" not found. Available: A, B'
    assert e.value.available == ["A", "B"]


def test_native_dates_become_datetimes(make_excel):
    excel = make_excel("dates.xlsx", {"S": [["date"], [datetime(2024, 1, 15)]]})
    name, df = read_sheet(excel)
    value = normalize_sheet(df, name).rows[0].values["date"]
    assert isinstance(value, datetime)
    assert not isinstance(value, pd.Timestamp)
    assert value.date().isoformat() == "2024-01-15"


def test_blank_cells_become_none(make_excel):
    excel = make_excel("blanks.xlsx", {"S": [["date", "narration", "amount"], ["2024-01-15", None, 5]]})
    name, df = read_sheet(excel)
    values = normalize_sheet(df, name).rows[0].values
    assert values["narration"] in (None, "")
    assert values["amount"] == 5


def test_na_strings_are_kept_as_text(make_excel):
    excel = make_excel("na.xlsx", {"S": [["supplier", "amount"], ["NA", 1]]})
    name, df = read_sheet(excel)
    assert normalize_sheet(df, name).rows[0].values["supplier"] == "NA"


def test_csv_is_a_single_sheet(make_csv):
    csv = make_csv("book.csv", "date,amount\n2024-01-15,1000\n")
    name, df = read_sheet(csv)
    assert name == CSV_SHEET_NAME
    sheet = normalize_sheet(df, name)
    assert sheet.rows[0].values == {"date": "2024-01-15", "amount": "1000"}
    with pytest.raises(SheetNotFoundError):
        read_sheet(csv, "Purchases")


def test_csv_byte_order_mark_is_dropped(temp_workdir: Path):
    csv = temp_workdir / "bom.csv"
    csv.write_bytes("\ufeffdate,amount\n2024-01-15,1\n".encode("utf-8"))
    name, df = read_sheet(csv)
    assert normalize_sheet(df, name).columns == ["date", "amount"]


def test_empty_csv_raises_empty_sheet(make_csv):
    csv = make_csv("empty.csv", "")
    name, df = read_sheet(csv)
    with pytest.raises(EmptySheetError):
        normalize_sheet(df, name)


def test_header_only_raises_empty_sheet(make_csv):
    csv = make_csv("header.csv", "date,amount\n")
    name, df = read_sheet(csv)
    with pytest.raises(EmptySheetError):
        normalize_sheet(df, name)


def test_blank_rows_are_skipped(make_csv):
    csv = make_csv("gaps.csv", "date,amount\n2024-01-15,1\n,\n2024-01-16,2\n")
    name, df = read_sheet(csv)
    rows = normalize_sheet(df, name).rows
    assert [r.values["amount"] for r in rows] == ["1", "2"]
    assert [r.row_number for r in rows] == [2, 4]


def test_blank_and_duplicate_headers_get_distinct_names(make_csv):
    csv = make_csv("dups.csv", "date,,date\n2024-01-15,x,2024-01-16\n")
    name, df = read_sheet(csv)
    sheet = normalize_sheet(df, name)
    assert sheet.columns == ["date", "Unnamed: 1", "date.1"]
    assert sheet.rows[0].values["date"] == "2024-01-15"


@pytest.mark.parametrize(
    "name, supported",
    [("a.xlsx", True), ("a.XLS", True), ("a.csv", True), ("a.txt", False), ("a.xlsm", False), ("a", False)],
)
def test_is_supported_file(name, supported):
    assert is_supported_file(Path(name)) is supported


def test_empty_csv_lines_keep_line_numbers(make_csv):
    csv = make_csv("lines.csv", "date,amount\n2024-01-15,1\n\n\n2024-01-16,2\n")
    name, df = read_sheet(csv)
    rows = normalize_sheet(df, name).rows
    assert [r.row_number for r in rows] == [2, 5]


def test_csv_records_longer_than_header(make_csv):
    csv = make_csv("trailing.csv", "date,amount\n2024-01-15,1000,\n2024-01-16,5,,extra\n2024-01-17\n")
    name, df = read_sheet(csv)
    sheet = normalize_sheet(df, name)
    assert sheet.columns == ["date", "amount", "Unnamed: 2", "Unnamed: 3"]
    assert [r.values["amount"] for r in sheet.rows] == ["1000", "5", None]
    assert sheet.rows[1].values["Unnamed: 3"] == "extra"
