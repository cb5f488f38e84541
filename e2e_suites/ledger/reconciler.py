"""
================================================================================
Ledger Reconciler
================================================================================

Pure text-level reconciliation of a rendered transaction history.

The banking demo renders each transaction as a table row whose text ends with
"<amount> Credit" or "<amount> Debit" (e.g. "Oct 5, 2024 10:15:02 AM 100 Credit").
This module turns those strings into typed rows, recomputes a balance from
them and answers presence queries. It never touches a browser: row text,
visibility flags and the balance label are supplied by the page object.

Malformed input never raises. Rows without a kind keyword or with a
non-numeric amount contribute nothing.

Usage:
    >>> compute_balance(["100 Credit", "40 Debit"])
    60
    >>> snapshot = LedgerSnapshot.from_text(["100 Credit", "40 Debit"], "60")
    >>> snapshot.is_balanced
    True

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple, Union

from loguru import logger


_AMOUNT_PATTERN = re.compile(r"[0-9]+")
_NON_DIGITS = re.compile(r"[^0-9]")


class TransactionKind(str, Enum):
    """Transaction type keyword as rendered in the history table."""

    CREDIT = "Credit"
    DEBIT = "Debit"
    UNKNOWN = "Unknown"


_KEYWORDS = {
    TransactionKind.CREDIT.value.lower(): TransactionKind.CREDIT,
    TransactionKind.DEBIT.value.lower(): TransactionKind.DEBIT,
}


@dataclass(frozen=True)
class TransactionRow:
    """
    One parsed row of the transaction history.

    Attributes:
        raw_text: Full text content of the rendered row
        kind: Credit, Debit or Unknown
        amount: Non-negative amount, or None if the row is not of the expected shape
    """

    raw_text: str
    kind: TransactionKind = TransactionKind.UNKNOWN
    amount: Optional[int] = None

    @property
    def is_parsed(self) -> bool:
        return self.kind is not TransactionKind.UNKNOWN and self.amount is not None

    @property
    def signed_amount(self) -> int:
        """Contribution of this row to the computed balance."""
        if self.amount is None:
            return 0
        if self.kind is TransactionKind.CREDIT:
            return self.amount
        if self.kind is TransactionKind.DEBIT:
            return -self.amount
        return 0


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    Rows and displayed balance captured together at one moment.

    Rebuilt from scratch for every check and never cached.
    """

    rows: Tuple[TransactionRow, ...]
    displayed_balance: int

    @classmethod
    def from_text(
        cls,
        rows: Iterable[str],
        displayed_balance: Union[int, str],
    ) -> "LedgerSnapshot":
        """
        Build a snapshot from raw row strings and a balance (int or label text).
        """
        if isinstance(displayed_balance, str):
            displayed_balance = parse_balance_label(displayed_balance)
        return cls(
            rows=tuple(parse_row(text) for text in rows),
            displayed_balance=displayed_balance,
        )

    @property
    def computed_balance(self) -> int:
        return sum(row.signed_amount for row in self.rows)

    @property
    def difference(self) -> int:
        """computed - displayed; zero when the ledger reconciles."""
        return self.computed_balance - self.displayed_balance

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0

    @property
    def unparsed_rows(self) -> Tuple[TransactionRow, ...]:
        return tuple(row for row in self.rows if not row.is_parsed)

    def summary(self) -> str:
        return (
            f"rows={len(self.rows)} unparsed={len(self.unparsed_rows)} "
            f"computed={self.computed_balance} displayed={self.displayed_balance}"
        )


# =============================================================================
# Parsing
# =============================================================================

def _to_int(digits: str) -> Optional[int]:
    """int(digits), or None when empty or past the interpreter's digit limit."""
    try:
        return int(digits)
    except ValueError:
        logger.debug(f"Digit string not convertible ({len(digits)} digits)")
        return None


def parse_row(raw_text: str) -> TransactionRow:
    """
    Parse one rendered row.

    The last token equal (case-insensitively) to "Credit" or "Debit" decides
    the kind; the token right before it is the amount candidate and must be
    plain ASCII digits. Anything else degrades to an Unknown row or a row
    without an amount.

    Args:
        raw_text: Text content of the row

    Returns:
        TransactionRow (never raises)
    """
    tokens = (raw_text or "").split()

    for index in range(len(tokens) - 1, -1, -1):
        kind = _KEYWORDS.get(tokens[index].lower())
        if kind is None:
            continue

        amount = None
        if index > 0 and _AMOUNT_PATTERN.fullmatch(tokens[index - 1]):
            amount = _to_int(tokens[index - 1])
        return TransactionRow(raw_text=raw_text, kind=kind, amount=amount)

    return TransactionRow(raw_text=raw_text)


def parse_balance_label(text: Optional[str]) -> int:
    """
    Read an integer balance from a label such as "Balance : 1500".

    Every non-digit is dropped; an empty result reads as 0.
    """
    amount = _to_int(_NON_DIGITS.sub("", text or ""))
    return amount if amount is not None else 0


# =============================================================================
# Aggregation
# =============================================================================

def compute_balance(rows: Iterable[str]) -> int:
    """
    Credits minus debits over the given row texts.

    The result is not clamped: a negative total is a signal for the caller.
    """
    total = 0
    for text in rows:
        row = parse_row(text)
        if not row.is_parsed:
            logger.debug(f"Row contributes nothing to balance: {text!r}")
        total += row.signed_amount
    return total


def count_visible(rows: Iterable[Tuple[str, bool]]) -> int:
    """Count (text, visible) pairs flagged visible."""
    return sum(1 for _text, visible in rows if visible)


# =============================================================================
# Presence Queries
# =============================================================================

def _is_amount(target: str) -> bool:
    return isinstance(target, str) and _AMOUNT_PATTERN.fullmatch(target) is not None


def matches_amount_token(text: str, target: str) -> bool:
    """
    True if a whitespace-delimited token, stripped of non-digits, equals target.

    Tolerant of currency symbols and separators ("$100,321" matches "100321"),
    which also lets it match digits of unrelated tokens such as timestamps.
    """
    if not _is_amount(target):
        return False
    return any(_NON_DIGITS.sub("", token) == target for token in text.split())


def matches_amount_boundary(text: str, target: str) -> bool:
    """True if target appears bounded by whitespace or the ends of text."""
    if not _is_amount(target):
        return False
    pattern = r"(?:^|\s)" + re.escape(target) + r"(?:\s|$)"
    return re.search(pattern, text) is not None


def contains_amount(rows: Iterable[str], target: str) -> bool:
    """
    Loose presence check: any row passes the token or the boundary check.
    """
    for text in rows:
        if matches_amount_token(text, target) or matches_amount_boundary(text, target):
            return True
    return False


def contains_exact_typed_amount(rows: Iterable[str], target: str) -> bool:
    """
    Strict presence check: target as its own token followed by Credit or Debit.
    """
    if not _is_amount(target):
        return False
    pattern = re.compile(r"(?:^|\s)" + re.escape(target) + r"\s(?:Credit|Debit)")
    return any(pattern.search(text) for text in rows)


def mentions_amount(rows: Iterable[str], target: str) -> bool:
    """Loosest check: target appears anywhere in a row's text."""
    if not _is_amount(target):
        return False
    return any(target in text for text in rows)


__all__ = [
    "TransactionKind",
    "TransactionRow",
    "LedgerSnapshot",
    "parse_row",
    "parse_balance_label",
    "compute_balance",
    "count_visible",
    "matches_amount_token",
    "matches_amount_boundary",
    "contains_amount",
    "contains_exact_typed_amount",
    "mentions_amount",
]
