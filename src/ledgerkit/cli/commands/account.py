"""Chart-of-accounts commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import AccountType


@click.group("account")
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Account type (inherited from --parent when omitted)",
)
@click.option("--parent", help="Parent account name, path or ID")
@click.pass_context
@reports_errors
def create_account(ctx, name: str, account_type: str | None, parent: str | None):
    """Create a chart-of-accounts entry.

    Examples:
        ledgerkit account create "Checking" --type Asset
        ledgerkit account create "Office Supplies" --parent "Expenses"
    """
    service = DirectoryService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]

    parent_id = resolve_account_or_exit(ctx, parent) if parent is not None else None
    if account_type is not None:
        account_type = next(t for t in AccountType if t.value.lower() == account_type.lower())

    account_id = service.create_account(
        company_id=company_id, name=name, account_type=account_type, parent_id=parent_id
    )
    click.echo(f"Created account '{service.format_account_path(account_id, company_id)}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List the chart of accounts."""
    service = DirectoryService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]

    accounts = service.list_accounts(company_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        path = service.format_account_path(acc.id, company_id)
        click.echo(f"ID: {acc.id:3d} | {acc.type.value:9s} | {path}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group)
