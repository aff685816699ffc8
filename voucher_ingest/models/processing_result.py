from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .parse_result import ParseResult

"""Processing result models for a multi-file ingestion run.

One FileStat per input file, aggregated into a ProcessingResult that feeds
the SUMMARY line and the CLI exit code.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Outcome of one input file.

    - SUCCESS: every row validated, vouchers produced
    - FAILED: boundary error or at least one row-level error
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: FileStatus
    result: ParseResult
    elapsed_seconds: float

    @property
    def voucher_count(self) -> int:
        return len(self.result.vouchers)

    @property
    def error_count(self) -> int:
        return len(self.result.errors)


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a run over one or more files."""
    success_files: int
    failed_files: int
    total_vouchers: int  # vouchers produced by successful files
    total_errors: int  # ParseErrors reported by failed files
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
