from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .voucher import VoucherRecord

"""Result envelope returned by the ingestion pipeline.

A ParseResult is either a success carrying every voucher of the file, or a
failure carrying every error found; never a mix of the two.
"""

__all__ = [
    "ParseError",
    "ParseResult",
    "FILE_LEVEL_ROW",
]

# Row used for errors that concern the whole file rather than one row
FILE_LEVEL_ROW = 0


@dataclass(frozen=True)
class ParseError:
    """A single problem found in the input file.

    Attributes:
        row: 1-based source row, or 0 for file-level problems
        message: Human readable description, stable wording
        column: Canonical column name the problem refers to, if any
        code: UPPER_SNAKE classification (used by the error log)
    """
    row: int
    message: str
    column: str | None = None
    code: str = "VALIDATION_ERROR"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"row": self.row}
        if self.column is not None:
            data["column"] = self.column
        data["message"] = self.message
        return data


@dataclass(frozen=True)
class ParseResult:
    success: bool
    vouchers: tuple[VoucherRecord, ...] = field(default_factory=tuple)
    errors: tuple[ParseError, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.errors and self.success:
            raise ValueError("a result carrying errors cannot be successful")
        if self.vouchers and not self.success:
            raise ValueError("a failed result cannot carry vouchers")

    @classmethod
    def ok(cls, vouchers: list[VoucherRecord], warnings: list[str]) -> ParseResult:
        return cls(success=True, vouchers=tuple(vouchers), warnings=tuple(warnings))

    @classmethod
    def failed(cls, errors: list[ParseError]) -> ParseResult:
        return cls(success=False, errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "vouchers": [v.to_dict() for v in self.vouchers],
            "errors": [e.to_dict() for e in self.errors],
            "warnings": list(self.warnings),
        }
