"""Main CLI entry point."""

from dataclasses import replace

import click

from ledgerkit.config import configure_logging, load_settings
from ledgerkit.database.factories import create_database

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    init_accounts,
    ledger,
    move,
    payee,
    staged,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL; takes precedence over --db-path (LEDGERKIT_DB_URL)",
    envvar="LEDGERKIT_DB_URL",
)
@click.option(
    "--company",
    "company_id",
    help="Company whose books to work on (LEDGERKIT_COMPANY, default 'default')",
    envvar="LEDGERKIT_COMPANY",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (LEDGERKIT_LOG_LEVEL, default WARNING)",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, company_id: str | None, log_level: str | None):
    """ledgerkit - double-entry books from categorized bank transactions.

    Stage bank transactions, categorize them into the ledger, and rebuild
    the journal from confirmed transactions whenever it needs repair.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = load_settings()
        configure_logging(log_level or settings.log_level)
        if db_url:
            settings = replace(settings, database_url=db_url)
        elif db_path:
            settings = replace(settings, database_path=db_path, database_url=None)

        db = create_database(settings)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["company_id"] = company_id or settings.company_id
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
payee.register_commands(cli)
init_accounts.register_commands(cli)
staged.register_commands(cli)
move.register_commands(cli)
transaction.register_commands(cli)
ledger.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
