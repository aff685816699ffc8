"""Domain models for the voucher ingestion pipeline.

This package contains the row, voucher, result and configuration models used
throughout the application.
"""

from .cells import CellKind, classify_cell
from .config_models import ImportConfig
from .error_record import ErrorRecord
from .parse_result import ParseError, ParseResult
from .processing_result import FileStat, FileStatus, ProcessingResult
from .row_data import CanonicalRow, RawRow
from .voucher import (
    InventoryEntry,
    LedgerEntry,
    MultiLineVoucher,
    Schema,
    SingleEntryVoucher,
    VoucherRecord,
)

__all__ = [
    # Cells and rows
    "CellKind",
    "classify_cell",
    "RawRow",
    "CanonicalRow",
    # Vouchers
    "Schema",
    "InventoryEntry",
    "LedgerEntry",
    "SingleEntryVoucher",
    "MultiLineVoucher",
    "VoucherRecord",
    # Results
    "ParseError",
    "ParseResult",
    "ErrorRecord",
    "FileStatus",
    "FileStat",
    "ProcessingResult",
    # Configuration
    "ImportConfig",
]
