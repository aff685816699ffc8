from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from ..excel.reader import (
    SUPPORTED_EXTENSIONS,
    EmptySheetError,
    SheetData,
    SheetNotFoundError,
    normalize_sheet,
    read_sheet,
)
from ..models.parse_result import FILE_LEVEL_ROW, ParseError, ParseResult
from ..models.row_data import CanonicalRow, RawRow
from ..models.voucher import Schema, VoucherRecord
from .grouping import group_by_voucher_id
from .headers import DEFAULT_HEADER_ALIASES, detect_schema, normalize_header
from .transform import transform_multi_line_groups, transform_single_entry_rows
from .validator import validate_rows

logger = logging.getLogger(__name__)

"""Voucher file pipeline.

parse_voucher_file runs one file end to end:

    exists -> extension -> open -> sheet -> non-empty
        -> normalize headers -> detect schema -> validate every row
        -> (abort with all errors) | (group) -> transform -> result

Every outcome is returned as a ParseResult. File-level problems produce a
single error at row 0; row problems are all collected before the pipeline
decides, and any of them rejects the whole file.
"""

__all__ = [
    "parse_voucher_file",
    "parse_voucher_rows",
    "canonicalize_rows",
]

EMPTY_FILE_MESSAGE = "Excel file is empty or has no data rows"


def _file_failure(message: str, code: str) -> ParseResult:
    return ParseResult.failed([ParseError(row=FILE_LEVEL_ROW, message=message, code=code)])


def canonicalize_rows(
    columns: list[str],
    rows: list[RawRow],
    aliases: Mapping[str, str] = DEFAULT_HEADER_ALIASES,
) -> tuple[list[str], list[CanonicalRow]]:
    """Rename every row's keys to canonical names.

    Each distinct header is normalized once. When several columns map to the
    same canonical name, the right-most column wins.
    """
    header_map = {column: normalize_header(column, aliases) for column in columns}
    canonical_headers = list(header_map.values())

    seen: dict[str, str] = {}
    for column, canonical in header_map.items():
        if canonical in seen and canonical:
            logger.warning(
                f"columns '{seen[canonical]}' and '{column}' both map to '{canonical}'; using '{column}'"
            )
        seen[canonical] = column

    canonical_rows = []
    for row in rows:
        values = {}
        for column, canonical in header_map.items():
            values[canonical] = row.values.get(column)
        canonical_rows.append(CanonicalRow(row_number=row.row_number, values=values))
    return canonical_headers, canonical_rows


def parse_voucher_rows(
    columns: list[str],
    rows: list[RawRow],
    aliases: Mapping[str, str] = DEFAULT_HEADER_ALIASES,
) -> ParseResult:
    """Run header normalization, validation and transformation on in-memory rows."""
    canonical_headers, canonical_rows = canonicalize_rows(columns, rows, aliases)
    schema = detect_schema(canonical_headers, aliases)
    logger.debug(f"detected schema={schema.value} rows={len(canonical_rows)}")

    errors = validate_rows(canonical_rows, schema)
    if errors:
        logger.debug(f"validation failed: {len(errors)} errors")
        return ParseResult.failed(errors)

    vouchers: list[VoucherRecord]
    if schema is Schema.SINGLE_ENTRY:
        vouchers = transform_single_entry_rows(canonical_rows)
        warning = f"Detected {schema.value} schema: {len(vouchers)} vouchers"
    else:
        groups = group_by_voucher_id(canonical_rows)
        vouchers = transform_multi_line_groups(groups)
        warning = f"Detected {schema.value} schema: {len(vouchers)} vouchers from {len(canonical_rows)} rows"
    return ParseResult.ok(vouchers, [warning])


def parse_voucher_file(
    path: Path | str,
    sheet_name: str | None = None,
    *,
    aliases: Mapping[str, str] = DEFAULT_HEADER_ALIASES,
) -> ParseResult:
    """Parse one voucher file into a ParseResult.

    Args:
        path: .xlsx, .xls or .csv file
        sheet_name: Sheet to read (None = first sheet)
        aliases: Header alias table, see headers.build_alias_table

    Returns:
        ParseResult; never raises for missing, unreadable or malformed files
    """
    path = Path(path)
    if not path.exists():
        return _file_failure(f"File not found: {path}", "FILE_NOT_FOUND")

    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        return _file_failure(
            f"Unsupported file format: {ext}. Supported: {', '.join(SUPPORTED_EXTENSIONS)}",
            "UNSUPPORTED_FORMAT",
        )

    try:
        target_sheet, df = read_sheet(path, sheet_name)
        sheet: SheetData = normalize_sheet(df, target_sheet)
        return parse_voucher_rows(sheet.columns, sheet.rows, aliases)
    except SheetNotFoundError as e:
        return _file_failure(str(e), "SHEET_NOT_FOUND")
    except EmptySheetError as e:
        logger.debug(f"{path.name}: {e}")
        return _file_failure(EMPTY_FILE_MESSAGE, "EMPTY_FILE")
    except Exception as e:
        logger.debug(f"{path.name}: parse failed", exc_info=True)
        return _file_failure(f"Error reading Excel file: {e}", "READ_ERROR")
