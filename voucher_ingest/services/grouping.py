from __future__ import annotations

from ..models.cells import cell_text
from ..models.row_data import CanonicalRow

"""Grouping of multi-line rows into vouchers."""

__all__ = [
    "group_by_voucher_id",
]


def group_by_voucher_id(rows: list[CanonicalRow]) -> tuple[tuple[str, tuple[CanonicalRow, ...]], ...]:
    """Partition rows by voucherId, keeping first-seen key order.

    Rows of one voucher need not be adjacent. Within a group the original
    row order is kept. Rows without a voucherId all share the key "".
    """
    order: list[str] = []
    members: dict[str, list[CanonicalRow]] = {}
    for row in rows:
        key = cell_text(row.get("voucherId"))
        if key not in members:
            order.append(key)
            members[key] = []
        members[key].append(row)
    return tuple((key, tuple(members[key])) for key in order)
