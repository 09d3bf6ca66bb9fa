"""End-to-end tests for the ledgerkit command line."""

import pytest

from ledgerkit.cli.main import cli


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database as company 'acme'."""

    def _run(*args, input=None):
        return cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "--company", "acme", *args], input=input
        )

    return _run


@pytest.fixture
def books(run):
    """A company with the default chart of accounts."""
    result = run("init-accounts")
    assert result.exit_code == 0, result.output
    return run


def test_init_accounts(run):
    result = run("init-accounts")

    assert result.exit_code == 0
    assert "Successfully created 23 accounts." in result.output

    again = run("init-accounts")
    assert "Accounts already exist" in again.output

    forced = run("init-accounts", "--force")
    assert "Successfully created 0 accounts." in forced.output


def test_account_create_and_list(books):
    result = books("account", "create", "Payroll", "--parent", "Expenses")

    assert result.exit_code == 0
    assert "Created account 'Expenses > Payroll'" in result.output
    assert "Expenses > Payroll" in books("account", "list").output


def test_account_create_type_mismatch(books):
    result = books("account", "create", "Laptop", "--type", "Asset", "--parent", "Expenses")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_stage_move_report_and_undo(books):
    staged = books(
        "staged", "add", "--date", "2024-03-01", "--description", "Office Depot", "--source", "Checking",
        "--spent", "50",
    )
    assert staged.exit_code == 0, staged.output
    assert "Staged transaction 1" in staged.output
    assert "Office Depot" in books("staged", "list").output

    moved = books("move", "1", "--category", "Office Supplies", "--corresponding", "Checking")
    assert moved.exit_code == 0, moved.output
    assert "Moved staged transaction 1" in moved.output
    assert "No staged transactions." in books("staged", "list").output

    journal = books("journal")
    assert "Expenses > Office Supplies" in journal.output
    assert "50.00" in journal.output

    trial = books("trial-balance")
    assert trial.exit_code == 0
    assert "Warning" not in trial.output

    assert "Office Depot" in books("transactions").output

    check = books("check")
    assert check.exit_code == 0
    assert "in sync" in check.output

    resync = books("resync")
    assert "Rebuilt 2 journal line(s) from 1 transaction(s)" in resync.output

    undo = books("undo", "1")
    assert undo.exit_code == 0, undo.output
    assert "Returned to staging as 2" in undo.output
    assert "No journal lines found." in books("journal").output


def test_move_twice_fails(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")
    books("move", "1", "--category", "Rent", "--corresponding", "Checking")

    result = books("move", "1", "--category", "Rent", "--corresponding", "Checking")

    assert result.exit_code == 1
    assert "not found or already moved" in result.output


def test_staged_split_and_move(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "50")

    bad = books("staged", "split", "1", "--entry", "Office Supplies", "-30", "--entry", "Software", "-15")
    assert bad.exit_code == 1
    assert "Error:" in bad.output

    good = books("staged", "split", "1", "--entry", "Office Supplies", "-30", "--entry", "Software", "-20")
    assert good.exit_code == 0, good.output
    assert "[split]" in books("staged", "list").output

    moved = books("move", "1", "--corresponding", "Checking")
    assert moved.exit_code == 0, moved.output
    assert "split 50.00" in moved.output


def test_move_many_with_missing_id(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")

    result = books("move-many", "1", "99", "--category", "Rent", "--corresponding", "Checking")

    assert result.exit_code == 1
    assert "99" in result.output
    assert "No transactions found." in books("transactions").output


def test_move_many(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")
    books("staged", "add", "--date", "2024-03-02", "--source", "Checking", "--spent", "20")

    result = books("move-many", "1", "2", "--category", "Rent", "--corresponding", "Checking")

    assert result.exit_code == 0, result.output
    assert "Moved 2 staged transaction(s)" in result.output


def test_check_reports_drift(books, temp_db):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")
    books("move", "1", "--category", "Rent", "--corresponding", "Checking")
    temp_db.delete_journal_lines([1], "acme")

    check = books("check")
    assert check.exit_code == 1
    assert "Transactions without journal lines: 1" in check.output

    books("resync")
    assert books("check").exit_code == 0


def test_resync_without_transactions(books):
    result = books("resync")

    assert result.exit_code == 1
    assert "no confirmed transactions" in result.output


def test_edit_and_delete(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")
    books("move", "1", "--category", "Rent", "--corresponding", "Checking")

    edited = books("edit", "1", "--category", "Software", "--description", "Annual license")
    assert edited.exit_code == 0, edited.output
    assert "Expenses > Software" in books("journal").output

    cancelled = books("delete", "1", input="n\n")
    assert cancelled.exit_code == 1
    assert "Annual license" in books("transactions").output

    deleted = books("delete", "1", "--yes")
    assert deleted.exit_code == 0
    assert "Deleted transaction 1" in deleted.output


def test_edit_needs_category_or_entries(books):
    result = books("edit", "1")

    assert result.exit_code == 1
    assert "Provide either --category or --entry" in result.output


def test_unknown_account_name(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "10")

    result = books("move", "1", "--category", "Payroll", "--corresponding", "Checking")

    assert result.exit_code == 1
    assert "Account 'Payroll' not found" in result.output


def test_payee_commands(books):
    created = books("payee", "create", "Office Depot")
    assert "Created payee 'Office Depot'" in created.output
    assert "Office Depot" in books("payee", "list").output


def test_oversized_amount_is_an_error(books):
    result = books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "1e30")

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "too large" in result.output


def test_move_split_row_with_category_fails(books):
    books("staged", "add", "--date", "2024-03-01", "--source", "Checking", "--spent", "50")
    books("staged", "split", "1", "--entry", "Office Supplies", "-30", "--entry", "Software", "-20")

    result = books("move", "1", "--category", "Rent", "--corresponding", "Checking")

    assert result.exit_code == 1
    assert "is split" in result.output
    assert "[split]" in books("staged", "list").output
