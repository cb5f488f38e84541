import sys

import pytest

from e2e_suites.ledger import (
    LedgerSnapshot,
    TransactionKind,
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


# Text as rendered by the history table: date, time, amount, type
DEPOSIT_ROW = "Oct 5, 2024 10:15:02 AM\t100321\tCredit"
WITHDRAW_ROW = "Oct 5, 2024 10:16:40 AM\t55000\tDebit"


def test_parse_row_credit_and_debit():
    credit = parse_row(DEPOSIT_ROW)
    assert credit.kind is TransactionKind.CREDIT
    assert credit.amount == 100321
    assert credit.signed_amount == 100321
    assert credit.raw_text == DEPOSIT_ROW

    debit = parse_row(WITHDRAW_ROW)
    assert debit.kind is TransactionKind.DEBIT
    assert debit.signed_amount == -55000


def test_parse_row_keyword_is_case_insensitive_and_normalized():
    assert parse_row("40 DEBIT").kind is TransactionKind.DEBIT
    assert parse_row("40 credit").kind is TransactionKind.CREDIT
    assert parse_row("40 credit").amount == 40


def test_parse_row_uses_last_keyword():
    row = parse_row("Credit 10 Debit 25 Credit")
    assert row.kind is TransactionKind.CREDIT
    assert row.amount == 25


@pytest.mark.parametrize(
    "text",
    ["-40 Debit", "40.5 Credit", "1,000 Credit", "$40 Credit", "Credit", "+5 Debit"],
)
def test_parse_row_rejects_malformed_amounts(text):
    row = parse_row(text)
    assert row.kind is not TransactionKind.UNKNOWN
    assert row.amount is None
    assert row.signed_amount == 0
    assert not row.is_parsed


@pytest.mark.parametrize("text", ["", "   ", "garbage text", "100 Refund", None])
def test_parse_row_without_keyword_is_unknown(text):
    row = parse_row(text)
    assert row.kind is TransactionKind.UNKNOWN
    assert row.amount is None
    assert row.signed_amount == 0


def test_compute_balance_scenarios():
    assert compute_balance([]) == 0
    assert compute_balance(["100 Credit", "40 Debit"]) == 60
    assert compute_balance(["0 Credit"]) == 0
    assert compute_balance(["100321 Credit", "55000 Debit", "45321 Debit"]) == 0


@pytest.mark.parametrize(
    "credits, debits",
    [
        ([5], []),
        ([], [7]),
        ([100, 200, 300], [50]),
        ([1, 1, 1], [10, 20]),
        ([100321], [55000, 45321]),
    ],
)
def test_compute_balance_is_credits_minus_debits(credits, debits):
    rows = [f"{amount} Credit" for amount in credits]
    # interleave debits between credits
    for position, amount in enumerate(debits):
        rows.insert(position * 2 % (len(rows) + 1), f"{amount} Debit")

    assert compute_balance(rows) == sum(credits) - sum(debits)


def test_compute_balance_is_not_clamped():
    assert compute_balance(["1000000 Debit"]) == -1000000


def test_garbage_rows_do_not_change_the_total():
    rows = [DEPOSIT_ROW, WITHDRAW_ROW]
    assert compute_balance(rows + ["garbage text"]) == compute_balance(rows)
    assert compute_balance(rows + ["abc Credit", "Debit"]) == compute_balance(rows)


def test_contains_amount_scenarios():
    rows = ["100 Credit", "40 Debit"]
    assert contains_amount(rows, "100")
    assert contains_amount(rows, "40")
    assert not contains_amount(rows, "999")
    assert not contains_amount([], "100")


def test_token_check_ignores_separators_and_matches_timestamps():
    assert matches_amount_token("Oct 5 $100,321 Credit", "100321")
    # "10:15:02" cleans to "101502"
    assert matches_amount_token(DEPOSIT_ROW, "101502")
    assert not matches_amount_token(DEPOSIT_ROW, "1003")


def test_boundary_check_requires_whitespace_or_ends():
    assert matches_amount_boundary("100 Credit", "100")
    assert matches_amount_boundary("Credit 100", "100")
    assert matches_amount_boundary(DEPOSIT_ROW, "100321")
    assert not matches_amount_boundary("$100,321 Credit", "100321")
    assert not matches_amount_boundary(DEPOSIT_ROW, "101502")
    assert not matches_amount_boundary("1003210 Credit", "100321")


def test_contains_exact_typed_amount_scenarios():
    rows = ["100 Credit", "40 Debit"]
    assert contains_exact_typed_amount(rows, "40")
    assert contains_exact_typed_amount(rows, "100")
    assert not contains_exact_typed_amount(rows, "999")
    assert contains_exact_typed_amount([DEPOSIT_ROW], "100321")
    assert not contains_exact_typed_amount([], "40")


def test_exact_typed_amount_needs_standalone_token_and_keyword():
    assert not contains_exact_typed_amount(["1100 Credit"], "100")
    assert not contains_exact_typed_amount(["100 Refund"], "100")
    assert not contains_exact_typed_amount(["100  Credit"], "100")
    assert not contains_exact_typed_amount([DEPOSIT_ROW], "101502")


@pytest.mark.parametrize(
    "rows, target",
    [
        (["100 Credit", "40 Debit"], "40"),
        (["100 Credit", "40 Debit"], "999"),
        ([DEPOSIT_ROW, WITHDRAW_ROW], "100321"),
        ([DEPOSIT_ROW, WITHDRAW_ROW], "101502"),
        (["$100,321 Credit"], "100321"),
        (["0 Credit"], "0"),
        (["1100 Credit"], "100"),
    ],
)
def test_strict_match_implies_loose_match(rows, target):
    if contains_exact_typed_amount(rows, target):
        assert contains_amount(rows, target)
    if not contains_amount(rows, target):
        assert not contains_exact_typed_amount(rows, target)


@pytest.mark.parametrize("target", ["", "abc", "-40", "4.0", " 40", "40 "])
def test_invalid_targets_never_match(target):
    rows = ["100 Credit", "40 Debit", "abc Credit", "-40 Debit"]
    assert not contains_amount(rows, target)
    assert not contains_exact_typed_amount(rows, target)
    assert not mentions_amount(rows, target)


def test_rejected_withdrawal_is_absent_from_ledger():
    rows = [DEPOSIT_ROW, WITHDRAW_ROW]
    assert not contains_amount(rows, "1000000")


def test_mentions_amount_is_plain_substring():
    assert mentions_amount(["1100 Credit"], "100")
    assert not mentions_amount(["1100 Credit"], "200")


def test_count_visible():
    assert count_visible([]) == 0
    assert count_visible([("100 Credit", True), ("40 Debit", False), ("5 Credit", True)]) == 2


@pytest.mark.parametrize(
    "label, expected",
    [("1500", 1500), ("Balance : 1,500", 1500), ("", 0), (None, 0), ("n/a", 0)],
)
def test_parse_balance_label(label, expected):
    assert parse_balance_label(label) == expected


def test_snapshot_reconciles_against_displayed_balance():
    snapshot = LedgerSnapshot.from_text([DEPOSIT_ROW, WITHDRAW_ROW, "noise"], "45321")

    assert snapshot.computed_balance == 45321
    assert snapshot.displayed_balance == 45321
    assert snapshot.is_balanced
    assert snapshot.difference == 0
    assert [row.raw_text for row in snapshot.unparsed_rows] == ["noise"]


def test_snapshot_reports_difference():
    snapshot = LedgerSnapshot.from_text(["100 Credit", "40 Debit"], 100)

    assert not snapshot.is_balanced
    assert snapshot.difference == -40
    assert "computed=60" in snapshot.summary()


def test_snapshot_is_immutable():
    snapshot = LedgerSnapshot.from_text(["100 Credit"], 100)
    with pytest.raises(AttributeError):
        snapshot.displayed_balance = 5


# Python 3.11+ refuses int() on very long digit strings unless the limit is disabled
_DIGIT_LIMIT = getattr(sys, "get_int_max_str_digits", lambda: 0)()


def test_oversized_amounts_never_raise():
    huge = "9" * 5000

    row = parse_row(f"Oct 5, 2024 10:15:02 AM {huge} Credit")
    balance = compute_balance(["100 Credit", f"{huge} Debit"])
    snapshot = LedgerSnapshot.from_text([f"{huge} Credit"], "Balance : " + "1" * 5000)

    assert row.kind is TransactionKind.CREDIT
    if 0 < _DIGIT_LIMIT < 5000:
        assert row.amount is None
        assert not row.is_parsed
        assert balance == 100
        assert parse_balance_label("Balance : " + "1" * 5000) == 0
        assert snapshot.computed_balance == 0
        assert snapshot.displayed_balance == 0
    else:
        assert row.amount == int(huge)
