"""SQLAlchemy models for the ledgerkit database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

from ledgerkit.domain.amount import STORAGE_PLACES

Base = declarative_base()


class Money(TypeDecorator):
    """Exact money column.

    Uses NUMERIC(19, 4) where the driver handles Decimal natively and a
    canonical decimal string elsewhere (SQLite would otherwise round-trip
    through float).
    """

    impl = Numeric(19, STORAGE_PLACES)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.supports_native_decimal:
            return dialect.type_descriptor(Numeric(19, STORAGE_PLACES, asdecimal=True))
        return dialect.type_descriptor(String(32))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(value).quantize(Decimal(1).scaleb(-STORAGE_PLACES))
        if dialect.supports_native_decimal:
            return value
        return f"{value:f}"

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


MONEY = Money()


def _now() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Chart-of-accounts entry."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "parent_id", "name", name="uq_account_company_parent_name"),
    )

    parent = relationship("Account", remote_side=[id], backref="children")


class Payee(Base):
    """Payee directory entry."""

    __tablename__ = "payees"

    id = Column(Integer, primary_key=True)
    company_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "name", name="uq_payee_company_name"),)


class ImportedTransaction(Base):
    """Staged bank transaction."""

    __tablename__ = "imported_transactions"

    id = Column(Integer, primary_key=True)
    company_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    spent = Column(MONEY, nullable=False)
    received = Column(MONEY, nullable=False)
    source_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    split_allocation = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (Index("ix_imported_company_date", "company_id", "date"), {"sqlite_autoincrement": True})


class Transaction(Base):
    """Confirmed, ledger-eligible transaction."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    company_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    spent = Column(MONEY, nullable=False)
    received = Column(MONEY, nullable=False)
    selected_category_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    corresponding_category_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    source_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    split_allocation = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (Index("ix_transactions_company_date", "company_id", "date"), {"sqlite_autoincrement": True})

    journal_lines = relationship("JournalLine", back_populates="transaction")


class JournalLine(Base):
    """Double-entry journal line owned by one transaction."""

    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True)
    company_id = Column(String, nullable=False)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    debit = Column(MONEY, nullable=False)
    credit = Column(MONEY, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (Index("ix_journal_company_date", "company_id", "date"),)

    transaction = relationship("Transaction", back_populates="journal_lines")


def create_session_factory(database_url: str, busy_timeout: float = 30.0) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and make sure the schema exists."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Writers queue on the database lock instead of failing immediately
        connect_args["timeout"] = busy_timeout
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
