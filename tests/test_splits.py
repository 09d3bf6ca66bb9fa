"""Tests for the split expander."""

import pytest

from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    Direction,
    SimpleCategorization,
    SplitCategorization,
    SplitEntry,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.splits import expand_categorization, validate_allocation

OFFICE, SOFTWARE, CHECKING, REVENUE = 10, 11, 1, 20


def a(value):
    return Amount.parse(value)


def entry(category_id, spent="0", received="0", description=None):
    return SplitEntry(category_id=category_id, spent=a(spent), received=a(received), description=description)


def test_simple_spent_emits_two_intents():
    intents = expand_categorization(
        SimpleCategorization(selected_category_id=OFFICE, corresponding_category_id=CHECKING),
        spent=a("50.00"),
        received=a("0"),
        description="Office Depot",
    )

    assert [(i.account_id, i.amount, i.direction) for i in intents] == [
        (OFFICE, a("50"), Direction.SPENT),
        (CHECKING, a("50"), Direction.RECEIVED),
    ]
    assert all(i.description == "Office Depot" for i in intents)


def test_simple_received_reverses_directions():
    intents = expand_categorization(
        SimpleCategorization(selected_category_id=REVENUE, corresponding_category_id=CHECKING),
        spent=a("0"),
        received=a("1000"),
        description="Client payment",
    )

    assert [(i.account_id, i.direction) for i in intents] == [
        (REVENUE, Direction.RECEIVED),
        (CHECKING, Direction.SPENT),
    ]


@pytest.mark.parametrize(
    "spent,received,message",
    [
        ("10", "5", "both spent and received"),
        ("0", "0", "either a spent or a received"),
        ("-5", "0", "cannot be negative"),
    ],
)
def test_simple_rejects_malformed_sides(spent, received, message):
    with pytest.raises(ValidationError, match=message):
        expand_categorization(
            SimpleCategorization(selected_category_id=OFFICE, corresponding_category_id=CHECKING),
            spent=a(spent),
            received=a(received),
            description="x",
        )


def test_missing_corresponding_account_is_rejected():
    with pytest.raises(ValidationError, match="corresponding account is required"):
        expand_categorization(
            SimpleCategorization(selected_category_id=OFFICE),
            spent=a("5"),
            received=a("0"),
            description="x",
        )


def test_unknown_categorization_type():
    with pytest.raises(TypeError):
        expand_categorization(object(), spent=a("5"), received=a("0"), description="x")


def test_split_emits_entry_intents_then_corresponding():
    intents = expand_categorization(
        SplitCategorization(
            allocation=(entry(OFFICE, spent="30.00", description="Paper"), entry(SOFTWARE, spent="20.00")),
            corresponding_category_id=CHECKING,
        ),
        spent=a("50.00"),
        received=a("0"),
        description="Office Depot",
    )

    assert [(i.account_id, i.amount, i.direction, i.description) for i in intents] == [
        (OFFICE, a("30"), Direction.SPENT, "Paper"),
        (SOFTWARE, a("20"), Direction.SPENT, "Office Depot"),
        (CHECKING, a("50"), Direction.RECEIVED, "Office Depot"),
    ]


def test_split_with_mixed_directions_nets_the_corresponding_line():
    """A refund inside a purchase: 80 spent, 30 received, net 50 spent."""
    intents = expand_categorization(
        SplitCategorization(
            allocation=(entry(OFFICE, spent="80"), entry(SOFTWARE, received="30")),
            corresponding_category_id=CHECKING,
        ),
        spent=a("50"),
        received=a("0"),
        description="Mixed",
    )

    assert intents[-1].account_id == CHECKING
    assert intents[-1].amount == a("50")
    assert intents[-1].direction is Direction.RECEIVED


def test_zero_net_split_has_no_corresponding_line():
    intents = expand_categorization(
        SplitCategorization(
            allocation=(entry(OFFICE, spent="25"), entry(SOFTWARE, received="25")),
            corresponding_category_id=CHECKING,
        ),
        spent=a("0"),
        received=a("0"),
        description="Reclass",
    )

    assert [i.account_id for i in intents] == [OFFICE, SOFTWARE]


def test_split_total_mismatch_is_rejected():
    with pytest.raises(ValidationError, match="45.00 spent but the transaction net is 50.00 spent"):
        expand_categorization(
            SplitCategorization(
                allocation=(entry(OFFICE, spent="30"), entry(SOFTWARE, spent="15")),
                corresponding_category_id=CHECKING,
            ),
            spent=a("50"),
            received=a("0"),
            description="x",
        )


def test_split_mismatch_by_a_fraction_of_a_cent_is_rejected():
    with pytest.raises(ValidationError):
        validate_allocation((entry(OFFICE, spent="49.9999"),), a("-50"))


@pytest.mark.parametrize("spent,received", [("10", "10"), ("0", "0")])
def test_split_entry_needs_exactly_one_side(spent, received):
    with pytest.raises(ValidationError, match="Split entry 1"):
        validate_allocation((entry(OFFICE, spent=spent, received=received),), a("0"))


def test_empty_allocation_is_rejected():
    with pytest.raises(ValidationError, match="at least one split entry"):
        validate_allocation((), a("-10"))
