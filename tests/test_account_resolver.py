"""Tests for resolving account references typed on the command line."""

import pytest

from ledgerkit.domain.errors import InvalidReferenceError
from ledgerkit.utils.account_resolver import resolve_account


def test_resolve_by_id(directory, accounts):
    assert resolve_account(directory, "acme", str(accounts["Checking"])) == accounts["Checking"]
    assert resolve_account(directory, "acme", accounts["Rent"]) == accounts["Rent"]


def test_resolve_by_name(directory, accounts):
    assert resolve_account(directory, "acme", "Software") == accounts["Software"]


def test_resolve_by_path(directory, accounts):
    assert resolve_account(directory, "acme", "Expenses>Office Supplies") == accounts["Office Supplies"]
    assert resolve_account(directory, "acme", "Expenses > Office Supplies") == accounts["Office Supplies"]


def test_ambiguous_name(directory, accounts):
    directory.create_account("acme", "Rent", parent_id=accounts["Revenue"])

    with pytest.raises(InvalidReferenceError, match="ambiguous"):
        resolve_account(directory, "acme", "Rent")
    assert resolve_account(directory, "acme", "Revenue > Rent") != accounts["Rent"]


def test_unknown_account(directory, accounts):
    with pytest.raises(InvalidReferenceError):
        resolve_account(directory, "acme", "Payroll")
    with pytest.raises(InvalidReferenceError):
        resolve_account(directory, "acme", "Expenses > Payroll")


def test_id_from_other_company(directory, other_company_account, accounts):
    with pytest.raises(InvalidReferenceError):
        resolve_account(directory, "acme", other_company_account)
