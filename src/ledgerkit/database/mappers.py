"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: money columns become ``Amount``
values, the JSON split column becomes a tuple of ``SplitEntry``.
"""

from typing import Any, Optional

from ledgerkit.domain import entities as domain
from ledgerkit.domain.amount import Amount
from ledgerkit.database.models import (
    Account as ORMAccount,
    Payee as ORMPayee,
    ImportedTransaction as ORMImportedTransaction,
    Transaction as ORMTransaction,
    JournalLine as ORMJournalLine,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.account_type),
        parent_id=orm_account.parent_id,
        company_id=orm_account.company_id,
        created_at=orm_account.created_at,
    )


def payee_to_domain(orm_payee: ORMPayee) -> domain.Payee:
    """Convert SQLAlchemy Payee model to domain Payee entity."""
    return domain.Payee(
        id=orm_payee.id,
        name=orm_payee.name,
        company_id=orm_payee.company_id,
        created_at=orm_payee.created_at,
    )


def split_to_json(
    allocation: Optional[tuple[domain.SplitEntry, ...]],
) -> Optional[list[dict[str, Any]]]:
    """Serialize a split allocation for the JSON column.

    Amounts are stored as strings so no float ever touches them.
    """
    if not allocation:
        return None
    return [
        {
            "category_id": entry.category_id,
            "spent": str(entry.spent.to_decimal()),
            "received": str(entry.received.to_decimal()),
            "description": entry.description,
        }
        for entry in allocation
    ]


def split_to_domain(raw: Optional[list[dict[str, Any]]]) -> Optional[tuple[domain.SplitEntry, ...]]:
    """Deserialize the JSON split column."""
    if not raw:
        return None
    return tuple(
        domain.SplitEntry(
            category_id=int(item["category_id"]),
            spent=Amount.parse(item.get("spent") or "0"),
            received=Amount.parse(item.get("received") or "0"),
            description=item.get("description"),
        )
        for item in raw
    )


def imported_transaction_to_domain(orm_row: ORMImportedTransaction) -> domain.ImportedTransaction:
    """Convert SQLAlchemy ImportedTransaction model to domain entity."""
    return domain.ImportedTransaction(
        id=orm_row.id,
        date=orm_row.date,
        description=orm_row.description or "",
        spent=Amount.parse(orm_row.spent),
        received=Amount.parse(orm_row.received),
        source_account_id=orm_row.source_account_id,
        company_id=orm_row.company_id,
        split_allocation=split_to_domain(orm_row.split_allocation),
        created_at=orm_row.created_at,
        updated_at=orm_row.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.ConfirmedTransaction:
    """Convert SQLAlchemy Transaction model to domain ConfirmedTransaction entity."""
    return domain.ConfirmedTransaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        spent=Amount.parse(orm_transaction.spent),
        received=Amount.parse(orm_transaction.received),
        selected_category_id=orm_transaction.selected_category_id,
        corresponding_category_id=orm_transaction.corresponding_category_id,
        payee_id=orm_transaction.payee_id,
        source_account_id=orm_transaction.source_account_id,
        company_id=orm_transaction.company_id,
        split_allocation=split_to_domain(orm_transaction.split_allocation),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        id=orm_line.id,
        transaction_id=orm_line.transaction_id,
        date=orm_line.date,
        description=orm_line.description or "",
        account_id=orm_line.account_id,
        debit=Amount.parse(orm_line.debit),
        credit=Amount.parse(orm_line.credit),
        company_id=orm_line.company_id,
        created_at=orm_line.created_at,
    )


def values_to_columns(values: dict[str, Any]) -> dict[str, Any]:
    """Convert domain-typed column values (Amount, SplitEntry tuples) for the ORM."""
    converted = {}
    for key, value in values.items():
        if isinstance(value, Amount):
            value = value.to_decimal()
        elif key == "split_allocation":
            value = split_to_json(value)
        converted[key] = value
    return converted


def journal_draft_to_orm(draft: domain.JournalLineDraft) -> ORMJournalLine:
    """Build an ORM JournalLine row from a builder draft."""
    return ORMJournalLine(
        company_id=draft.company_id,
        transaction_id=draft.transaction_id,
        date=draft.date,
        description=draft.description,
        account_id=draft.account_id,
        debit=draft.debit.to_decimal(),
        credit=draft.credit.to_decimal(),
    )
