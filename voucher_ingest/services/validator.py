from __future__ import annotations

from collections.abc import Callable

from ..models.cells import coerce_number, is_blank
from ..models.parse_result import ParseError
from ..models.row_data import CanonicalRow
from ..models.voucher import Schema
from .dates import parse_date_value

"""Row-level validation.

validate_row never raises and never stops at the first problem: every rule
that applies to a row is checked and each failure becomes one ParseError.
Numeric rules only look at non-empty cells; an empty required cell is
already reported as missing.
"""

__all__ = [
    "validate_row",
    "validate_rows",
]

# column -> (accepts the coerced number, message)
_NumericRule = tuple[str, Callable[[float], bool], str]

_SINGLE_ENTRY_RULES: tuple[_NumericRule, ...] = (
    ("totalAmount", lambda n: n > 0, "Invalid totalAmount: must be a positive number"),
)

_MULTI_LINE_RULES: tuple[_NumericRule, ...] = (
    ("quantity", lambda n: n > 0, "Invalid quantity: must be a positive number"),
    ("rate", lambda n: n >= 0, "Invalid rate: must be a non-negative number"),
    ("taxAmount", lambda n: True, "Invalid taxAmount: must be a number"),
)


def validate_row(row: CanonicalRow, row_number: int, schema: Schema) -> list[ParseError]:
    """Return every ParseError for one canonical row (empty list when valid)."""
    errors: list[ParseError] = []

    for column in schema.required_fields:
        if is_blank(row.get(column)):
            errors.append(ParseError(
                row=row_number,
                column=column,
                message=f"Missing required field: {column}",
                code="MISSING_FIELD",
            ))

    raw_date = row.get("date")
    if not is_blank(raw_date) and parse_date_value(raw_date) is None:
        errors.append(ParseError(
            row=row_number,
            column="date",
            message=f"Invalid date format. Expected YYYY-MM-DD, got: {raw_date}",
            code="INVALID_DATE",
        ))

    rules = _SINGLE_ENTRY_RULES if schema is Schema.SINGLE_ENTRY else _MULTI_LINE_RULES
    for column, accepts, message in rules:
        value = row.get(column)
        if is_blank(value):
            continue
        number = coerce_number(value)
        if number is None or not accepts(number):
            errors.append(ParseError(row=row_number, column=column, message=message, code="INVALID_NUMBER"))

    return errors


def validate_rows(rows: list[CanonicalRow], schema: Schema) -> list[ParseError]:
    """Validate every row, in order, collecting all errors."""
    errors: list[ParseError] = []
    for row in rows:
        errors.extend(validate_row(row, row.row_number, schema))
    return errors
