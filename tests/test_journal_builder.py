"""Tests for the journal builder and the balance invariant."""

import random
from datetime import date

import pytest

from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    ConfirmedTransaction,
    Direction,
    LedgerIntent,
    SplitEntry,
)
from ledgerkit.domain.errors import BalanceError, ValidationError
from ledgerkit.domain.journal import build, build_for_transaction, check_balance

CHECKING, OFFICE, SOFTWARE, RENT, REVENUE = 1, 2, 3, 4, 5
CATEGORIES = [OFFICE, SOFTWARE, RENT, REVENUE]


def a(value):
    return Amount.parse(value)


def make_transaction(spent="0", received="0", selected=OFFICE, split=None, transaction_id=1):
    return ConfirmedTransaction(
        id=transaction_id,
        date=date(2024, 3, 1),
        description="Test",
        spent=a(spent),
        received=a(received),
        selected_category_id=None if split else selected,
        corresponding_category_id=CHECKING,
        payee_id=None,
        source_account_id=CHECKING,
        company_id="acme",
        split_allocation=split,
    )


def test_spent_intent_becomes_debit():
    lines = build(
        transaction_id=7,
        date=date(2024, 3, 1),
        description="Office Depot",
        intents=[
            LedgerIntent(OFFICE, a("50"), Direction.SPENT, "Office Depot"),
            LedgerIntent(CHECKING, a("50"), Direction.RECEIVED, "Office Depot"),
        ],
        company_id="acme",
    )

    assert [(line.account_id, line.debit, line.credit) for line in lines] == [
        (OFFICE, a("50"), a("0")),
        (CHECKING, a("0"), a("50")),
    ]
    assert all(line.transaction_id == 7 and line.company_id == "acme" for line in lines)


def test_intent_without_description_uses_fallback():
    lines = build(
        transaction_id=1,
        date=date(2024, 3, 1),
        description="Fallback",
        intents=[
            LedgerIntent(OFFICE, a("5"), Direction.SPENT, ""),
            LedgerIntent(CHECKING, a("5"), Direction.RECEIVED, "Bank"),
        ],
        company_id="acme",
    )
    assert [line.description for line in lines] == ["Fallback", "Bank"]


def test_unbalanced_intents_raise_balance_error():
    with pytest.raises(BalanceError) as exc_info:
        build(
            transaction_id=3,
            date=date(2024, 3, 1),
            description="Broken",
            intents=[
                LedgerIntent(OFFICE, a("50"), Direction.SPENT, ""),
                LedgerIntent(CHECKING, a("45"), Direction.RECEIVED, ""),
            ],
            company_id="acme",
        )

    assert exc_info.value.transaction_id == 3
    assert exc_info.value.debit_total == a("50")
    assert exc_info.value.credit_total == a("45")


def test_balance_error_is_not_a_domain_error():
    assert not issubclass(BalanceError, ValueError)


def test_non_positive_intent_amount_is_rejected():
    with pytest.raises(ValidationError, match="positive amount"):
        build(
            transaction_id=1,
            date=date(2024, 3, 1),
            description="",
            intents=[LedgerIntent(OFFICE, a("0"), Direction.SPENT, "")],
            company_id="acme",
        )


def test_check_balance_accepts_empty_set():
    check_balance(1, [])


def test_build_is_deterministic():
    txn = make_transaction(
        spent="50",
        split=(
            SplitEntry(OFFICE, a("30"), a("0")),
            SplitEntry(SOFTWARE, a("20"), a("0")),
        ),
    )
    assert build_for_transaction(txn) == build_for_transaction(txn)


def _random_amount(rng):
    return a(f"{rng.randint(1, 500000) / 100:.2f}")


def _random_transaction(rng, transaction_id):
    received = rng.random() < 0.3
    if rng.random() < 0.5:
        amount = _random_amount(rng)
        return make_transaction(
            spent="0" if received else amount,
            received=amount if received else "0",
            selected=rng.choice(CATEGORIES),
            transaction_id=transaction_id,
        )

    entries = []
    for _ in range(rng.randint(1, 5)):
        value = _random_amount(rng)
        if rng.random() < 0.25:
            entries.append(SplitEntry(rng.choice(CATEGORIES), a("0"), value))
        else:
            entries.append(SplitEntry(rng.choice(CATEGORIES), value, a("0")))
    net = Amount.sum(e.net for e in entries)
    return make_transaction(
        spent=net.abs() if net.is_negative() else "0",
        received=net if net.is_positive() else "0",
        split=tuple(entries),
        transaction_id=transaction_id,
    )


@pytest.mark.parametrize("seed", range(20))
def test_random_transactions_always_balance(seed):
    """Balance invariant across random simple and split transactions."""
    rng = random.Random(seed)
    for transaction_id in range(1, 51):
        txn = _random_transaction(rng, transaction_id)
        lines = build_for_transaction(txn)

        assert Amount.sum(line.debit for line in lines) == Amount.sum(line.credit for line in lines)
        assert all(line.debit.is_zero() != line.credit.is_zero() for line in lines)
        # Lines for the bank side reflect the stored net exactly
        if not txn.net.is_zero():
            bank = [line for line in lines if line.account_id == CHECKING]
            assert bank[-1].debit - bank[-1].credit == txn.net
