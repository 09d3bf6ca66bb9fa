"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import (
    Account,
    AccountType,
    ConfirmedTransaction,
    ImportedTransaction,
    JournalLine,
    JournalLineDraft,
    Payee,
    SplitEntry,
)


class Database(ABC):
    """Abstract database interface for ledgerkit.

    Write methods commit on their own when called outside ``atomic()``.
    Inside an ``atomic()`` block they only stage their changes, and the block
    commits or rolls back everything at once.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Unit of work
    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Run the enclosed writes as one all-or-nothing unit.

        Nested blocks join the outermost one.

        Raises:
            PersistenceError: If the database rejects a write; nothing is kept
        """
        pass

    @abstractmethod
    def lock_company(self, company_id: str, exclusive: bool = False) -> None:
        """Take the company's journal lock for the rest of the current atomic unit."""
        pass

    # Directory operations
    @abstractmethod
    def create_account(
        self, company_id: str, name: str, account_type: AccountType, parent_id: Optional[int] = None
    ) -> int:
        """Create a chart-of-accounts entry. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int, company_id: Optional[str] = None) -> Optional[Account]:
        """Get account by ID, optionally scoped to a company."""
        pass

    @abstractmethod
    def get_account_by_name(self, company_id: str, name: str) -> Optional[Account]:
        """Get the first account with this name in a company."""
        pass

    @abstractmethod
    def list_accounts(self, company_id: str) -> list[Account]:
        """List all accounts of a company."""
        pass

    @abstractmethod
    def create_payee(self, company_id: str, name: str) -> int:
        """Create a payee. Returns payee ID."""
        pass

    @abstractmethod
    def get_payee(self, payee_id: int, company_id: Optional[str] = None) -> Optional[Payee]:
        """Get payee by ID, optionally scoped to a company."""
        pass

    @abstractmethod
    def list_payees(self, company_id: str) -> list[Payee]:
        """List all payees of a company."""
        pass

    # Staging operations
    @abstractmethod
    def insert_imported_transactions(self, rows: Iterable[dict]) -> list[int]:
        """Insert staging rows. Returns IDs in input order."""
        pass

    @abstractmethod
    def get_imported_transaction(self, imported_id: int) -> Optional[ImportedTransaction]:
        """Get staging row by ID."""
        pass

    @abstractmethod
    def get_imported_transactions(
        self, imported_ids: Iterable[int], company_id: Optional[str] = None
    ) -> list[ImportedTransaction]:
        """Fetch several staging rows in a single query, optionally scoped to a company."""
        pass

    @abstractmethod
    def list_imported_transactions(
        self, company_id: str, updated_since: Optional[datetime] = None
    ) -> list[ImportedTransaction]:
        """List staging rows of a company, newest first."""
        pass

    @abstractmethod
    def imported_transaction_exists(
        self, company_id: str, source_account_id: int, date: date, description: str, spent: Amount, received: Amount
    ) -> bool:
        """Check whether an identical staging row already exists."""
        pass

    @abstractmethod
    def update_imported_split(self, imported_id: int, allocation: Optional[tuple[SplitEntry, ...]]) -> None:
        """Replace the split allocation of a staging row."""
        pass

    @abstractmethod
    def delete_imported_transactions(self, imported_ids: Iterable[int], company_id: Optional[str] = None) -> int:
        """Compare-and-delete staging rows. Returns the number actually removed."""
        pass

    # Confirmed transaction operations
    @abstractmethod
    def insert_transaction(self, row: dict) -> int:
        """Insert a confirmed transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[ConfirmedTransaction]:
        """Get confirmed transaction by ID."""
        pass

    @abstractmethod
    def get_transactions(
        self, transaction_ids: Iterable[int], company_id: Optional[str] = None
    ) -> list[ConfirmedTransaction]:
        """Fetch several confirmed transactions, optionally scoped to a company."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        company_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        updated_since: Optional[datetime] = None,
    ) -> list[ConfirmedTransaction]:
        """List confirmed transactions of a company, newest first."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, values: dict) -> None:
        """Update columns of a confirmed transaction."""
        pass

    @abstractmethod
    def delete_transactions(self, transaction_ids: Iterable[int], company_id: str) -> int:
        """Delete confirmed transactions. Returns the number removed."""
        pass

    # Journal operations
    @abstractmethod
    def insert_journal_lines(self, drafts: Iterable[JournalLineDraft]) -> int:
        """Insert journal lines. Returns the number inserted."""
        pass

    @abstractmethod
    def delete_journal_lines(self, transaction_ids: Iterable[int], company_id: str) -> int:
        """Delete journal lines of the given transactions."""
        pass

    @abstractmethod
    def delete_company_journal(self, company_id: str) -> int:
        """Delete every journal line of a company."""
        pass

    @abstractmethod
    def list_journal_lines(
        self,
        company_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        transaction_id: Optional[int] = None,
    ) -> list[JournalLine]:
        """List journal lines ordered by date, transaction and line ID."""
        pass
