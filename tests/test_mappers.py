"""Tests for database mappers."""

from datetime import UTC, date, datetime
from decimal import Decimal

from ledgerkit.database.mappers import (
    account_to_domain,
    imported_transaction_to_domain,
    journal_draft_to_orm,
    split_to_domain,
    split_to_json,
    transaction_to_domain,
    values_to_columns,
)
from ledgerkit.database.models import (
    Account as ORMAccount,
    ImportedTransaction as ORMImportedTransaction,
    Transaction as ORMTransaction,
)
from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    ConfirmedTransaction,
    ImportedTransaction,
    JournalLineDraft,
    SplitEntry,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=3,
            name="Office Supplies",
            account_type="Expense",
            parent_id=2,
            company_id="acme",
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.type is AccountType.EXPENSE
        assert domain_account.parent_id == 2
        assert domain_account.company_id == "acme"


class TestSplitMapper:
    """Tests for the JSON split column."""

    def test_split_json_keeps_amounts_as_strings(self):
        allocation = (
            SplitEntry(7, Amount.parse("30.10"), Amount.zero(), "Paper"),
            SplitEntry(8, Amount.zero(), Amount.parse("0.01")),
        )

        raw = split_to_json(allocation)

        assert raw[0] == {"category_id": 7, "spent": "30.1000", "received": "0.0000", "description": "Paper"}
        assert split_to_domain(raw) == allocation

    def test_empty_split_is_none(self):
        assert split_to_json(None) is None
        assert split_to_json(()) is None
        assert split_to_domain(None) is None
        assert split_to_domain([]) is None

    def test_missing_amount_defaults_to_zero(self):
        (entry,) = split_to_domain([{"category_id": "4", "spent": "12.5"}])

        assert entry.category_id == 4
        assert entry.received.is_zero()
        assert entry.description is None


class TestTransactionMappers:
    """Tests for staged and confirmed transaction mappers."""

    def test_imported_transaction_to_domain(self):
        orm_row = ORMImportedTransaction(
            id=1,
            date=date(2024, 3, 1),
            description=None,
            spent=Decimal("50.0000"),
            received=Decimal("0"),
            source_account_id=2,
            company_id="acme",
            split_allocation=None,
        )
        row = imported_transaction_to_domain(orm_row)

        assert isinstance(row, ImportedTransaction)
        assert row.description == ""
        assert row.net == Amount.parse("-50")
        assert row.split_allocation is None

    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id=9,
            date=date(2024, 3, 1),
            description="Client payment",
            spent="0",
            received="1000.00",
            selected_category_id=5,
            corresponding_category_id=2,
            payee_id=None,
            source_account_id=2,
            company_id="acme",
            split_allocation=None,
        )
        txn = transaction_to_domain(orm_transaction)

        assert isinstance(txn, ConfirmedTransaction)
        assert txn.received == Amount.parse("1000")
        assert txn.categorization.selected_category_id == 5
        assert txn.categorization.corresponding_category_id == 2


class TestColumnConversion:
    """Tests for domain values going into ORM columns."""

    def test_values_to_columns(self):
        split = (SplitEntry(7, Amount.parse("5"), Amount.zero()),)

        columns = values_to_columns({"spent": Amount.parse("5"), "split_allocation": split, "description": "x"})

        assert columns["spent"] == Decimal("5.0000")
        assert columns["split_allocation"][0]["category_id"] == 7
        assert columns["description"] == "x"

    def test_values_to_columns_clears_split(self):
        assert values_to_columns({"split_allocation": None}) == {"split_allocation": None}

    def test_journal_draft_to_orm(self):
        draft = JournalLineDraft(
            transaction_id=9,
            date=date(2024, 3, 1),
            description="Office Depot",
            account_id=3,
            debit=Amount.parse("50"),
            credit=Amount.zero(),
            company_id="acme",
        )

        line = journal_draft_to_orm(draft)

        assert line.transaction_id == 9
        assert line.debit == Decimal("50.0000")
        assert line.credit == Decimal("0.0000")
