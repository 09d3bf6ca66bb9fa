"""Shared pytest fixtures for ledgerkit tests."""

import os
import tempfile
from datetime import date

import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.mover import ConfirmationMover
from ledgerkit.domain.resync import ResyncEngine
from ledgerkit.domain.staging import StagingService

COMPANY = "acme"
OTHER_COMPANY = "globex"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def directory(temp_db):
    """Create a DirectoryService with a temporary database."""
    return DirectoryService(temp_db)


@pytest.fixture
def staging(temp_db):
    """Create a StagingService with a temporary database."""
    return StagingService(temp_db)


@pytest.fixture
def mover(temp_db):
    """Create a ConfirmationMover with a temporary database."""
    return ConfirmationMover(temp_db)


@pytest.fixture
def resync_engine(temp_db):
    """Create a ResyncEngine with a temporary database."""
    return ResyncEngine(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def accounts(directory):
    """Create a small chart of accounts and return IDs by name."""
    ids = {}
    ids["Assets"] = directory.create_account(COMPANY, "Assets", AccountType.ASSET)
    ids["Checking"] = directory.create_account(COMPANY, "Checking", parent_id=ids["Assets"])
    ids["Savings"] = directory.create_account(COMPANY, "Savings", parent_id=ids["Assets"])
    ids["Revenue"] = directory.create_account(COMPANY, "Revenue", AccountType.REVENUE)
    ids["Expenses"] = directory.create_account(COMPANY, "Expenses", AccountType.EXPENSE)
    ids["Office Supplies"] = directory.create_account(COMPANY, "Office Supplies", parent_id=ids["Expenses"])
    ids["Software"] = directory.create_account(COMPANY, "Software", parent_id=ids["Expenses"])
    ids["Rent"] = directory.create_account(COMPANY, "Rent", parent_id=ids["Expenses"])
    return ids


@pytest.fixture
def other_company_account(directory):
    """An expense account that belongs to a different company."""
    return directory.create_account(OTHER_COMPANY, "Office Supplies", AccountType.EXPENSE)


@pytest.fixture
def stage(staging, accounts):
    """Stage a transaction against Checking and return its ID."""

    def _stage(spent="0", received="0", description="Office Depot", txn_date=date(2024, 3, 1), split=None):
        return staging.stage(
            company_id=COMPANY,
            date=txn_date,
            description=description,
            source_account_id=accounts["Checking"],
            spent=spent,
            received=received,
            split_allocation=split,
        )

    return _stage


@pytest.fixture
def company_id():
    """Company that the ``accounts`` fixture belongs to."""
    return COMPANY


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
