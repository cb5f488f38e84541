"""
================================================================================
Ledger
================================================================================

Browser-free reconciliation of rendered transaction histories.

================================================================================
"""

from .reconciler import (
    LedgerSnapshot,
    TransactionKind,
    TransactionRow,
    compute_balance,
    contains_amount,
    contains_exact_typed_amount,
    count_visible,
    matches_amount_boundary,
    matches_amount_token,
    mentions_amount,
    parse_balance_label,
    parse_row,
)

__all__ = [
    "LedgerSnapshot",
    "TransactionKind",
    "TransactionRow",
    "compute_balance",
    "contains_amount",
    "contains_exact_typed_amount",
    "count_visible",
    "matches_amount_boundary",
    "matches_amount_token",
    "mentions_amount",
    "parse_balance_label",
    "parse_row",
]
