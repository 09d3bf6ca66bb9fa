"""Split expander: categorized transaction -> ledger-line intents.

Pure functions, no database access. The output order is part of the contract
because resync relies on re-deriving identical line sets:

- simple: [selected category, corresponding account]
- split: [allocation entries in order..., corresponding account]
"""

from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    Categorization,
    ConfirmedTransaction,
    Direction,
    LedgerIntent,
    SimpleCategorization,
    SplitCategorization,
    SplitEntry,
    net_amount,
)
from ledgerkit.domain.errors import ValidationError


def validate_sides(spent: Amount, received: Amount, *, allow_both_zero: bool = False, label: str = "Transaction") -> None:
    """Check a spent/received pair.

    Raises:
        ValidationError: If a side is negative, both are nonzero, or both are
            zero (unless allowed)
    """
    if spent.is_negative() or received.is_negative():
        raise ValidationError(f"{label} amounts cannot be negative (spent {spent}, received {received})")
    if spent.is_positive() and received.is_positive():
        raise ValidationError(f"{label} cannot have both spent and received amounts")
    if spent.is_zero() and received.is_zero() and not allow_both_zero:
        raise ValidationError(f"{label} must have either a spent or a received amount")


def direction_of(spent: Amount, received: Amount) -> Direction:
    """Direction of a validated spent/received pair."""
    return Direction.SPENT if spent.is_positive() else Direction.RECEIVED


def validate_allocation(allocation: tuple[SplitEntry, ...], parent_net: Amount) -> None:
    """Check a split allocation against its parent's net amount.

    Raises:
        ValidationError: If the allocation is empty, an entry is malformed, or
            the entries' net total differs from the parent net
    """
    if not allocation:
        raise ValidationError("Split transactions must have at least one split entry")
    for position, entry in enumerate(allocation, start=1):
        validate_sides(entry.spent, entry.received, label=f"Split entry {position}")

    allocated = Amount.sum(entry.net for entry in allocation)
    if allocated != parent_net:
        raise ValidationError(
            f"Split entries total {_signed(allocated)} but the transaction net is {_signed(parent_net)}"
        )


def expand_categorization(
    categorization: Categorization,
    spent: Amount,
    received: Amount,
    description: str,
) -> tuple[LedgerIntent, ...]:
    """Expand a categorization of a spent/received pair into ledger intents.

    Raises:
        ValidationError: If amounts or split entries are malformed, or the
            corresponding account is missing
    """
    if not isinstance(categorization, (SimpleCategorization, SplitCategorization)):
        raise TypeError(f"Unknown categorization {type(categorization).__name__}")
    if categorization.corresponding_category_id is None:
        raise ValidationError("A corresponding account is required")
    if isinstance(categorization, SimpleCategorization):
        return _expand_simple(categorization, spent, received, description)
    return _expand_split(categorization, spent, received, description)


def expand(transaction: ConfirmedTransaction) -> tuple[LedgerIntent, ...]:
    """Expand a confirmed transaction into ledger intents."""
    return expand_categorization(
        transaction.categorization,
        spent=transaction.spent,
        received=transaction.received,
        description=transaction.description,
    )


def _expand_simple(
    categorization: SimpleCategorization, spent: Amount, received: Amount, description: str
) -> tuple[LedgerIntent, ...]:
    validate_sides(spent, received)
    direction = direction_of(spent, received)
    amount = spent if direction is Direction.SPENT else received
    return (
        LedgerIntent(
            account_id=categorization.selected_category_id,
            amount=amount,
            direction=direction,
            description=description,
        ),
        LedgerIntent(
            account_id=categorization.corresponding_category_id,
            amount=amount,
            direction=direction.opposite(),
            description=description,
        ),
    )


def _expand_split(
    categorization: SplitCategorization, spent: Amount, received: Amount, description: str
) -> tuple[LedgerIntent, ...]:
    validate_sides(spent, received, allow_both_zero=True)
    parent_net = net_amount(spent, received)
    validate_allocation(categorization.allocation, parent_net)

    intents = []
    for entry in categorization.allocation:
        entry_direction = direction_of(entry.spent, entry.received)
        intents.append(
            LedgerIntent(
                account_id=entry.category_id,
                amount=entry.spent if entry_direction is Direction.SPENT else entry.received,
                direction=entry_direction,
                description=entry.description or description,
            )
        )

    # A zero-net split has nothing left to post against the bank account
    if not parent_net.is_zero():
        net_direction = Direction.RECEIVED if parent_net.is_positive() else Direction.SPENT
        intents.append(
            LedgerIntent(
                account_id=categorization.corresponding_category_id,
                amount=parent_net.abs(),
                direction=net_direction.opposite(),
                description=description,
            )
        )
    return tuple(intents)


def _signed(amount: Amount) -> str:
    if amount.is_negative():
        return f"{amount.abs()} spent"
    if amount.is_positive():
        return f"{amount} received"
    return "0.00"
