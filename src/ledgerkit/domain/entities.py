"""Domain model entities for ledgerkit.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. The persistence layer converts ORM rows into these before
handing them to the domain services.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from ledgerkit.domain.amount import Amount
from ledgerkit.domain.errors import ValidationError


class AccountType(str, Enum):
    """Accounting classification of a chart-of-accounts entry."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    COGS = "COGS"
    EXPENSE = "Expense"

    @property
    def is_debit_normal(self) -> bool:
        """True when increases to this type are recorded as debits."""
        return self in (AccountType.ASSET, AccountType.EXPENSE, AccountType.COGS)


class Direction(str, Enum):
    """Money direction of a transaction or ledger-line intent."""

    SPENT = "spent"
    RECEIVED = "received"

    def opposite(self) -> "Direction":
        return Direction.RECEIVED if self is Direction.SPENT else Direction.SPENT


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry."""

    id: int
    name: str
    type: AccountType
    parent_id: Optional[int]
    company_id: str
    created_at: datetime


@dataclass(frozen=True)
class Payee:
    """Payee directory entry."""

    id: int
    name: str
    company_id: str
    created_at: datetime


@dataclass(frozen=True)
class SplitEntry:
    """One category allocation of a split transaction."""

    category_id: int
    spent: Amount
    received: Amount
    description: Optional[str] = None

    @property
    def net(self) -> Amount:
        """Signed amount, positive for money received."""
        return self.received - self.spent


@dataclass(frozen=True)
class SimpleCategorization:
    """Two-sided categorization: one category against one corresponding account.

    ``corresponding_category_id`` may be left as None when editing, which
    keeps the transaction's current corresponding account.
    """

    selected_category_id: int
    corresponding_category_id: Optional[int] = None


@dataclass(frozen=True)
class SplitCategorization:
    """Allocation of one bank event across several categories."""

    allocation: tuple[SplitEntry, ...]
    corresponding_category_id: Optional[int] = None


Categorization = Union[SimpleCategorization, SplitCategorization]


def net_amount(spent: Amount, received: Amount) -> Amount:
    """Signed net of a spent/received pair, positive for money received."""
    return received - spent


@dataclass(frozen=True)
class ImportedTransaction:
    """Staged bank transaction awaiting categorization."""

    id: int
    date: date
    description: str
    spent: Amount
    received: Amount
    source_account_id: int
    company_id: str
    split_allocation: Optional[tuple[SplitEntry, ...]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def net(self) -> Amount:
        return net_amount(self.spent, self.received)


@dataclass(frozen=True)
class ConfirmedTransaction:
    """Categorized, ledger-eligible transaction."""

    id: int
    date: date
    description: str
    spent: Amount
    received: Amount
    selected_category_id: Optional[int]
    corresponding_category_id: int
    payee_id: Optional[int]
    source_account_id: int
    company_id: str
    split_allocation: Optional[tuple[SplitEntry, ...]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def net(self) -> Amount:
        return net_amount(self.spent, self.received)

    @property
    def categorization(self) -> Categorization:
        if self.split_allocation:
            return SplitCategorization(
                corresponding_category_id=self.corresponding_category_id,
                allocation=self.split_allocation,
            )
        if self.selected_category_id is None:
            raise ValidationError(f"Transaction {self.id} has neither a category nor a split allocation")
        return SimpleCategorization(
            selected_category_id=self.selected_category_id,
            corresponding_category_id=self.corresponding_category_id,
        )


@dataclass(frozen=True)
class LedgerIntent:
    """One ledger line to be written, before debit/credit assignment."""

    account_id: int
    amount: Amount
    direction: Direction
    description: str


@dataclass(frozen=True)
class JournalLineDraft:
    """Balanced journal line produced by the journal builder, not yet persisted."""

    transaction_id: int
    date: date
    description: str
    account_id: int
    debit: Amount
    credit: Amount
    company_id: str


@dataclass(frozen=True)
class JournalLine:
    """Persisted journal line."""

    id: int
    transaction_id: int
    date: date
    description: str
    account_id: int
    debit: Amount
    credit: Amount
    company_id: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class MoveRequest:
    """One entry of a batch move."""

    imported_id: int
    selected_category_id: Optional[int]
    corresponding_category_id: int
    payee_id: Optional[int] = None


@dataclass(frozen=True)
class IngestResult:
    """Outcome of a bank-feed ingestion pass."""

    inserted_ids: tuple[int, ...]
    skipped: int

    @property
    def inserted(self) -> int:
        return len(self.inserted_ids)


@dataclass(frozen=True)
class ResyncResult:
    """Outcome of a full journal rebuild."""

    company_id: str
    transactions: int
    lines: int


@dataclass(frozen=True)
class TrialBalanceRow:
    """Debit/credit totals for one account."""

    account: Account
    debit_total: Amount
    credit_total: Amount

    @property
    def balance(self) -> Amount:
        """Balance signed by the account type's normal side."""
        if self.account.type.is_debit_normal:
            return self.debit_total - self.credit_total
        return self.credit_total - self.debit_total


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance report."""

    company_id: str
    start_date: Optional[date]
    end_date: Optional[date]
    rows: tuple[TrialBalanceRow, ...]

    @property
    def debit_total(self) -> Amount:
        return Amount.sum(row.debit_total for row in self.rows)

    @property
    def credit_total(self) -> Amount:
        return Amount.sum(row.credit_total for row in self.rows)

    @property
    def is_balanced(self) -> bool:
        return self.debit_total == self.credit_total


@dataclass(frozen=True)
class DriftReport:
    """Differences between confirmed transactions and the persisted journal."""

    company_id: str
    missing_lines: tuple[int, ...] = field(default_factory=tuple)
    unbalanced: tuple[int, ...] = field(default_factory=tuple)
    orphan_lines: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not (self.missing_lines or self.unbalanced or self.orphan_lines)
