from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..models.voucher import Schema

"""Header normalization and format detection.

Column names are lower-cased, stripped of whitespace and underscores, and
looked up in an alias table. The built-in table below is relied upon by
everyone preparing input files, so entries are only ever added, never
changed or removed.
"""

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_HEADER_ALIASES",
    "AliasConflictError",
    "collapse_header",
    "build_alias_table",
    "normalize_header",
    "detect_schema",
]

CANONICAL_FIELDS: frozenset[str] = frozenset({
    "date",
    "voucherId",
    "supplierLedger",
    "purchaseLedger",
    "totalAmount",
    "stockItemName",
    "quantity",
    "rate",
    "unit",
    "taxLedger",
    "taxAmount",
    "narration",
    "voucherNumber",
})

# Underscored keys can never match after collapsing; they stay listed so the
# table reads the same as the documented alias vocabulary.
DEFAULT_HEADER_ALIASES: Mapping[str, str] = MappingProxyType({
    "date": "date",
    "voucherid": "voucherId",
    "voucher_id": "voucherId",
    "supplierledger": "supplierLedger",
    "supplier_ledger": "supplierLedger",
    "supplier": "supplierLedger",
    "partyname": "supplierLedger",
    "party_name": "supplierLedger",
    "purchaseledger": "purchaseLedger",
    "purchase_ledger": "purchaseLedger",
    "purchaseaccount": "purchaseLedger",
    "purchase_account": "purchaseLedger",
    "totalamount": "totalAmount",
    "total_amount": "totalAmount",
    "amount": "totalAmount",
    "stockitemname": "stockItemName",
    "stock_item_name": "stockItemName",
    "itemname": "stockItemName",
    "item_name": "stockItemName",
    "item": "stockItemName",
    "quantity": "quantity",
    "qty": "quantity",
    "rate": "rate",
    "price": "rate",
    "unit": "unit",
    "uom": "unit",
    "taxledger": "taxLedger",
    "tax_ledger": "taxLedger",
    "taxamount": "taxAmount",
    "tax_amount": "taxAmount",
    "tax": "taxAmount",
    "narration": "narration",
    "remarks": "narration",
    "notes": "narration",
    "vouchernumber": "voucherNumber",
    "voucher_number": "voucherNumber",
    "vchno": "voucherNumber",
})

_SEPARATORS_RE = re.compile(r"[_\s]+")


class AliasConflictError(ValueError):
    """Raised when extra aliases try to redefine a built-in alias or target an unknown field."""


def collapse_header(header: str | None) -> str:
    """Lower-case ``header`` and drop every run of whitespace/underscores."""
    if not header:
        return ""
    return _SEPARATORS_RE.sub("", str(header).lower())


def build_alias_table(extra: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return the built-in alias table extended with ``extra``.

    Keys of ``extra`` are collapsed like headers are. Re-declaring a built-in
    alias with the same target is tolerated, pointing it elsewhere is not.
    """
    if not extra:
        return DEFAULT_HEADER_ALIASES
    table = dict(DEFAULT_HEADER_ALIASES)
    for alias, target in extra.items():
        key = collapse_header(alias)
        if not key:
            raise AliasConflictError(f"empty header alias for '{target}'")
        if target not in CANONICAL_FIELDS:
            raise AliasConflictError(f"alias '{alias}' targets unknown field '{target}'")
        existing = DEFAULT_HEADER_ALIASES.get(key)
        if existing is not None and existing != target:
            raise AliasConflictError(
                f"alias '{alias}' is built in as '{existing}' and cannot map to '{target}'"
            )
        table[key] = target
    return MappingProxyType(table)


def normalize_header(header: str | None, aliases: Mapping[str, str] = DEFAULT_HEADER_ALIASES) -> str:
    """Map one column name to its canonical field name.

    Unrecognized names are returned unchanged; empty input yields "".
    """
    if not header:
        return ""
    return aliases.get(collapse_header(header), header)


def detect_schema(headers: Iterable[str], aliases: Mapping[str, str] = DEFAULT_HEADER_ALIASES) -> Schema:
    """Classify a file by its header set.

    Any column that normalizes to stockItemName makes the file multi-line.
    Canonical names normalize to themselves, so both raw and already
    normalized header lists are accepted.
    """
    for header in headers:
        if normalize_header(header, aliases) == "stockItemName":
            return Schema.MULTI_LINE
    return Schema.SINGLE_ENTRY
