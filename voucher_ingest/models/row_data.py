from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Row models for the voucher ingestion pipeline.

A RawRow is what the workbook reader yields for one physical data row; a
CanonicalRow is the same row after its column names have been mapped onto the
canonical field vocabulary. Row numbers always refer to the source file
(header = row 1, first data row = row 2).
"""

__all__ = [
    "RawRow",
    "CanonicalRow",
]


@dataclass(frozen=True)
class RawRow:
    """One data row keyed by the column names found in the file."""
    row_number: int  # 1-based source row number
    values: dict[str, Any]  # original column name -> cell value


@dataclass(frozen=True)
class CanonicalRow:
    """One data row keyed by canonical field names.

    Columns that are not part of the canonical vocabulary keep their original
    name and are ignored by validation and transformation.
    """
    row_number: int
    values: dict[str, Any]  # canonical field name -> cell value

    def get(self, field: str) -> Any:
        return self.values.get(field)
