"""Spreadsheet ingestion of purchase vouchers.

Reads a voucher spreadsheet, detects whether it is laid out one row per
voucher or one row per line item, validates every row and returns either all
vouchers or all errors.
"""

from .models import (
    InventoryEntry,
    LedgerEntry,
    MultiLineVoucher,
    ParseError,
    ParseResult,
    Schema,
    SingleEntryVoucher,
    VoucherRecord,
)
from .services.pipeline import parse_voucher_file, parse_voucher_rows

__version__ = "0.1.0"

__all__ = [
    "parse_voucher_file",
    "parse_voucher_rows",
    "ParseResult",
    "ParseError",
    "Schema",
    "SingleEntryVoucher",
    "MultiLineVoucher",
    "InventoryEntry",
    "LedgerEntry",
    "VoucherRecord",
]
