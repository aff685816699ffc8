from __future__ import annotations

import math
from datetime import date
from enum import Enum
from numbers import Number
from typing import Any

"""Tagged view over untyped spreadsheet cell values.

Cells arrive from the reader as plain Python values (str, int/float, date or
datetime, None). Every consumer classifies a value through ``classify_cell``
instead of probing types ad hoc, and converts it to a typed field only
through ``coerce_number`` / ``cell_text``.
"""

__all__ = [
    "CellKind",
    "classify_cell",
    "is_blank",
    "is_truthy",
    "coerce_number",
    "cell_text",
]


class CellKind(Enum):
    """Shape of a single cell value."""
    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    OTHER = "other"  # booleans, times, anything the reader did not expect


def classify_cell(value: Any) -> CellKind:
    if value is None:
        return CellKind.EMPTY
    if isinstance(value, str):
        return CellKind.EMPTY if value == "" else CellKind.TEXT
    # bool is an int subclass; a TRUE/FALSE cell is not a number
    if isinstance(value, bool):
        return CellKind.OTHER
    # datetime is a date subclass, pandas.Timestamp a datetime subclass
    if isinstance(value, date):
        return CellKind.DATE
    if isinstance(value, Number):
        if isinstance(value, float) and math.isnan(value):
            return CellKind.EMPTY
        return CellKind.NUMBER
    return CellKind.OTHER


def is_blank(value: Any) -> bool:
    return classify_cell(value) is CellKind.EMPTY


def is_truthy(value: Any) -> bool:
    """Truthiness of a cell: empty cells and numeric zero are falsy."""
    kind = classify_cell(value)
    if kind is CellKind.EMPTY:
        return False
    if kind is CellKind.NUMBER:
        return value != 0
    return True


def coerce_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it is not numeric.

    Text is stripped before parsing; booleans, dates and non-finite values
    are rejected.
    """
    kind = classify_cell(value)
    if kind is CellKind.NUMBER:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
    elif kind is CellKind.TEXT:
        text = value.strip()
        # float() also reads non-ASCII digits such as "١٥"
        if not text.isascii():
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def cell_text(value: Any) -> str:
    """Render a cell as trimmed text ("" for empty cells).

    Integral floats lose their decimal part so that a voucher id typed as
    101 in a spreadsheet reads back as "101", not "101.0".
    """
    kind = classify_cell(value)
    if kind is CellKind.EMPTY:
        return ""
    if kind is CellKind.NUMBER and isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
