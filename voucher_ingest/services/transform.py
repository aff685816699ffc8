from __future__ import annotations

from typing import Any

from ..models.cells import cell_text, coerce_number, is_truthy
from ..models.row_data import CanonicalRow
from ..models.voucher import InventoryEntry, LedgerEntry, MultiLineVoucher, SingleEntryVoucher
from .dates import parse_date_value

"""Conversion of validated canonical rows into voucher records.

Only call these on rows that passed validation: required fields are assumed
present and numeric fields parseable.
"""

__all__ = [
    "transform_single_entry_rows",
    "transform_multi_line_groups",
]


def _optional_text(value: Any) -> str | None:
    if not is_truthy(value):
        return None
    return cell_text(value) or None


def _number(value: Any) -> float:
    number = coerce_number(value)
    if number is None:
        raise ValueError(f"not a number: {value!r}")
    return number


def _has_amount(value: Any) -> bool:
    """Numeric truthiness: text such as "0" or "0.00" is as falsy as the number 0."""
    number = coerce_number(value)
    return number is not None and number != 0


def _date(value: Any) -> str:
    parsed = parse_date_value(value)
    if parsed is None:
        raise ValueError(f"not a date: {value!r}")
    return parsed


def transform_single_entry_rows(rows: list[CanonicalRow]) -> list[SingleEntryVoucher]:
    return [
        SingleEntryVoucher(
            row_number=row.row_number,
            date=_date(row.get("date")),
            supplier_ledger=cell_text(row.get("supplierLedger")),
            purchase_ledger=cell_text(row.get("purchaseLedger")),
            total_amount=_number(row.get("totalAmount")),
            narration=_optional_text(row.get("narration")),
            voucher_number=_optional_text(row.get("voucherNumber")),
        )
        for row in rows
    ]


def transform_multi_line_groups(
    groups: tuple[tuple[str, tuple[CanonicalRow, ...]], ...],
) -> list[MultiLineVoucher]:
    """Build one voucher per group; header fields come from the group's first row."""
    vouchers: list[MultiLineVoucher] = []
    for _voucher_id, rows in groups:
        if not rows:
            continue
        first = rows[0]
        inventory: list[InventoryEntry] = []
        ledgers: list[LedgerEntry] = []
        for row in rows:
            inventory.append(InventoryEntry(
                stock_item_name=cell_text(row.get("stockItemName")),
                quantity=_number(row.get("quantity")),
                rate=_number(row.get("rate")),
                unit=cell_text(row.get("unit")),
            ))
            if is_truthy(row.get("taxLedger")) and _has_amount(row.get("taxAmount")):
                ledgers.append(LedgerEntry(
                    ledger_name=cell_text(row.get("taxLedger")),
                    amount=_number(row.get("taxAmount")),
                ))
        vouchers.append(MultiLineVoucher(
            row_number=first.row_number,
            date=_date(first.get("date")),
            supplier_ledger=cell_text(first.get("supplierLedger")),
            purchase_ledger=cell_text(first.get("purchaseLedger")),
            inventory_entries=tuple(inventory),
            ledger_entries=tuple(ledgers) if ledgers else None,
            narration=_optional_text(first.get("narration")),
            voucher_number=_optional_text(first.get("voucherNumber")),
        ))
    return vouchers
