from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .parse_result import ParseError

"""ErrorRecord model for the JSON Lines error log.

Each record is one ParseError of a rejected file, stamped with the file and
sheet it came from. Row 0 marks a file-level error where no single row is to
blame. The key set is fixed by voucher_ingest/logging/error_log_schema.json.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input file name
        sheet: Sheet name, or "<FILE_LEVEL>" when no sheet was read
        row: 1-based source row number, 0 for file-level errors
        column: Canonical column name, None when the error is not column bound
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error message as reported to the caller
    """
    timestamp: str
    file: str
    sheet: str
    row: int
    column: str | None
    error_type: str
    message: str

    @staticmethod
    def create(
        file: str, sheet: str, row: int, error_type: str, message: str, column: str | None = None
    ) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            column=column,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_parse_error(file: str, sheet: str, error: ParseError) -> ErrorRecord:
        return ErrorRecord.create(
            file=file,
            sheet=sheet,
            row=error.row,
            error_type=error.code,
            message=error.message,
            column=error.column,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
