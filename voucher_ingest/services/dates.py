from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from openpyxl.utils.datetime import from_excel

from ..models.cells import CellKind, classify_cell

"""Date parsing for voucher cells.

Accepted shapes, first match wins:

1. date / datetime (pandas.Timestamp included): calendar date as stored
2. number: spreadsheet serial date, 1900 date system, time of day ignored
3. text ``YYYY-MM-DD``: returned as-is
4. text ``D-M-YYYY`` or ``D/M/YYYY``: read day first, then month

Month-first text is never inferred. ``03-04-2024`` is the 3rd of April.
"""

__all__ = [
    "parse_date_value",
    "serial_to_date",
    "MAX_SERIAL",
]

# 9999-12-31 in the 1900 date system
MAX_SERIAL = 2958465

_ISO_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DAY_FIRST_RE = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{4})", re.ASCII)


def serial_to_date(serial: float) -> date | None:
    """Convert a spreadsheet serial number to a calendar date.

    Serial 1 is 1900-01-01. Serials before 1 or after MAX_SERIAL are rejected.
    """
    if not math.isfinite(serial) or serial < 1 or serial > MAX_SERIAL:
        return None
    return from_excel(math.floor(serial)).date()


def _format(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_value(value: Any) -> str | None:
    """Return ``value`` as a canonical ``YYYY-MM-DD`` string, or None."""
    kind = classify_cell(value)
    if kind is CellKind.DATE:
        if isinstance(value, datetime):
            value = value.date()
        return _format(value)
    if kind is CellKind.NUMBER:
        try:
            serial = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        parsed = serial_to_date(serial)
        return _format(parsed) if parsed is not None else None
    if kind is CellKind.TEXT:
        if _ISO_RE.fullmatch(value):
            return value
        match = _DAY_FIRST_RE.fullmatch(value)
        if match:
            day, month, year = match.groups()
            return f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    return None
