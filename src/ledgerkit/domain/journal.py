"""Journal builder: ledger intents -> balanced debit/credit lines.

Spending debits the named account, receiving credits it. The split expander
already gives the corresponding account the opposite direction, so the
builder only maps direction to side and proves the result balances.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    ConfirmedTransaction,
    Direction,
    JournalLineDraft,
    LedgerIntent,
)
from ledgerkit.domain.errors import BalanceError, ValidationError
from ledgerkit.domain.splits import expand

logger = logging.getLogger(__name__)


def build(
    transaction_id: Optional[int],
    date: date,
    description: str,
    intents: Iterable[LedgerIntent],
    company_id: str,
) -> tuple[JournalLineDraft, ...]:
    """Convert ledger intents into journal line drafts.

    Args:
        transaction_id: Owning confirmed transaction
        date: Posting date for every line
        description: Fallback description for intents without one
        intents: Output of the split expander
        company_id: Owning company

    Returns:
        Lines in intent order

    Raises:
        ValidationError: If an intent has a zero or negative amount
        BalanceError: If debits and credits differ
    """
    lines = []
    for intent in intents:
        if not intent.amount.is_positive():
            raise ValidationError(
                f"Ledger line for account {intent.account_id} needs a positive amount, got {intent.amount}"
            )
        if intent.direction is Direction.SPENT:
            debit, credit = intent.amount, Amount.zero()
        else:
            debit, credit = Amount.zero(), intent.amount
        lines.append(
            JournalLineDraft(
                transaction_id=transaction_id,
                date=date,
                description=intent.description or description,
                account_id=intent.account_id,
                debit=debit,
                credit=credit,
                company_id=company_id,
            )
        )

    check_balance(transaction_id, lines)
    return tuple(lines)


def build_for_transaction(transaction: ConfirmedTransaction) -> tuple[JournalLineDraft, ...]:
    """Expand and build the journal lines of a confirmed transaction."""
    return build(
        transaction_id=transaction.id,
        date=transaction.date,
        description=transaction.description,
        intents=expand(transaction),
        company_id=transaction.company_id,
    )


def check_balance(transaction_id: Optional[int], lines) -> None:
    """Raise BalanceError unless total debits equal total credits."""
    debit_total = Amount.sum(line.debit for line in lines)
    credit_total = Amount.sum(line.credit for line in lines)
    if debit_total != credit_total:
        logger.error(
            "Refusing unbalanced journal for transaction %s: debit %s, credit %s",
            transaction_id,
            debit_total,
            credit_total,
        )
        raise BalanceError(transaction_id, debit_total, credit_total)
