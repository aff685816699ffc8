from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

"""Canonical voucher records produced by the transformer.

Records are immutable and typed: every field has already passed validation,
so numbers are floats and dates are canonical ``YYYY-MM-DD`` strings.
``to_dict`` renders the camelCase shape consumed by downstream posting
tools; optional fields that are absent are left out entirely.
"""

__all__ = [
    "Schema",
    "InventoryEntry",
    "LedgerEntry",
    "SingleEntryVoucher",
    "MultiLineVoucher",
    "VoucherRecord",
]


class Schema(Enum):
    """Layout of a voucher file.

    - SINGLE_ENTRY: one row is one voucher
    - MULTI_LINE: one voucher spans every row sharing a voucherId
    """
    SINGLE_ENTRY = "single-entry"
    MULTI_LINE = "multi-line"

    @property
    def required_fields(self) -> tuple[str, ...]:
        if self is Schema.SINGLE_ENTRY:
            return ("date", "supplierLedger", "purchaseLedger", "totalAmount")
        return (
            "voucherId",
            "date",
            "supplierLedger",
            "purchaseLedger",
            "stockItemName",
            "quantity",
            "rate",
            "unit",
        )


@dataclass(frozen=True)
class InventoryEntry:
    stock_item_name: str
    quantity: float
    rate: float
    unit: str

    @property
    def amount(self) -> float:
        return self.quantity * self.rate

    def to_dict(self) -> dict[str, Any]:
        return {
            "stockItemName": self.stock_item_name,
            "quantity": self.quantity,
            "rate": self.rate,
            "unit": self.unit,
        }


@dataclass(frozen=True)
class LedgerEntry:
    """Auxiliary charge (tax and the like) booked alongside the inventory lines."""
    ledger_name: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        return {"ledgerName": self.ledger_name, "amount": self.amount}


def _common_dict(record: SingleEntryVoucher | MultiLineVoucher) -> dict[str, Any]:
    data: dict[str, Any] = {
        "rowNumber": record.row_number,
        "date": record.date,
        "mode": record.mode.value,
        "supplierLedger": record.supplier_ledger,
        "purchaseLedger": record.purchase_ledger,
    }
    if record.narration is not None:
        data["narration"] = record.narration
    if record.voucher_number is not None:
        data["voucherNumber"] = record.voucher_number
    return data


@dataclass(frozen=True)
class SingleEntryVoucher:
    """Voucher built from exactly one spreadsheet row."""
    row_number: int
    date: str
    supplier_ledger: str
    purchase_ledger: str
    total_amount: float
    narration: str | None = None
    voucher_number: str | None = None

    @property
    def mode(self) -> Schema:
        return Schema.SINGLE_ENTRY

    def to_dict(self) -> dict[str, Any]:
        data = _common_dict(self)
        data["totalAmount"] = self.total_amount
        return data


@dataclass(frozen=True)
class MultiLineVoucher:
    """Voucher assembled from all rows sharing one voucherId.

    row_number, date, ledgers, narration and voucher_number come from the
    first row seen for the voucher id.
    """
    row_number: int
    date: str
    supplier_ledger: str
    purchase_ledger: str
    inventory_entries: tuple[InventoryEntry, ...]
    ledger_entries: tuple[LedgerEntry, ...] | None = None
    narration: str | None = None
    voucher_number: str | None = None

    @property
    def mode(self) -> Schema:
        return Schema.MULTI_LINE

    @property
    def invoice_total(self) -> float:
        """Inventory value plus every auxiliary ledger amount."""
        total = sum(entry.amount for entry in self.inventory_entries)
        if self.ledger_entries:
            total += sum(entry.amount for entry in self.ledger_entries)
        return total

    def to_dict(self) -> dict[str, Any]:
        data = _common_dict(self)
        data["inventoryEntries"] = [e.to_dict() for e in self.inventory_entries]
        if self.ledger_entries is not None:
            data["ledgerEntries"] = [e.to_dict() for e in self.ledger_entries]
        return data


VoucherRecord = Union[SingleEntryVoucher, MultiLineVoucher]
