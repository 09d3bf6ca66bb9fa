"""Initialize a default small-business chart of accounts."""

import click

from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError

# (name, parent, type); parents are listed before their children
INITIAL_ACCOUNTS = [
    ("Assets", None, AccountType.ASSET),
    ("Checking", "Assets", AccountType.ASSET),
    ("Savings", "Assets", AccountType.ASSET),
    ("Accounts Receivable", "Assets", AccountType.ASSET),
    ("Liabilities", None, AccountType.LIABILITY),
    ("Credit Card", "Liabilities", AccountType.LIABILITY),
    ("Accounts Payable", "Liabilities", AccountType.LIABILITY),
    ("Equity", None, AccountType.EQUITY),
    ("Owner's Equity", "Equity", AccountType.EQUITY),
    ("Owner's Draw", "Equity", AccountType.EQUITY),
    ("Revenue", None, AccountType.REVENUE),
    ("Sales", "Revenue", AccountType.REVENUE),
    ("Services", "Revenue", AccountType.REVENUE),
    ("Interest Income", "Revenue", AccountType.REVENUE),
    ("Cost of Goods Sold", None, AccountType.COGS),
    ("Materials", "Cost of Goods Sold", AccountType.COGS),
    ("Expenses", None, AccountType.EXPENSE),
    ("Office Supplies", "Expenses", AccountType.EXPENSE),
    ("Software", "Expenses", AccountType.EXPENSE),
    ("Rent", "Expenses", AccountType.EXPENSE),
    ("Utilities", "Expenses", AccountType.EXPENSE),
    ("Travel", "Expenses", AccountType.EXPENSE),
    ("Bank Fees", "Expenses", AccountType.EXPENSE),
]


@click.command("init-accounts")
@click.option("--force", is_flag=True, help="Add missing default accounts even if the chart is not empty")
@click.pass_context
def init_accounts(ctx, force: bool):
    """Initialize the company with a default chart of accounts."""
    service = DirectoryService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]

    existing = service.list_accounts(company_id)
    if existing and not force:
        click.echo("Accounts already exist. Use --force to add missing defaults.")
        return

    click.echo("Creating initial chart of accounts...")

    ids_by_name = {acc.name: acc.id for acc in existing if acc.parent_id is None}
    present = {(acc.parent_id, acc.name) for acc in existing}
    created = 0
    errors = 0

    for name, parent_name, account_type in INITIAL_ACCOUNTS:
        parent_id = ids_by_name.get(parent_name) if parent_name else None
        if (parent_id, name) in present:
            continue
        try:
            ids_by_name[name] = service.create_account(
                company_id=company_id, name=name, account_type=account_type, parent_id=parent_id
            )
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create account '{name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} accounts.")
    else:
        click.echo(f"Created {created} accounts with {errors} errors.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
