"""Payee commands."""

import click

from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.domain.directory import DirectoryService


@click.group("payee")
def payee_group():
    """Manage payees."""
    pass


@payee_group.command("create")
@click.argument("name", metavar="PAYEE_NAME")
@click.pass_context
@reports_errors
def create_payee(ctx, name: str):
    """Create a payee."""
    service = DirectoryService(ctx.obj["db"])
    payee_id = service.create_payee(company_id=ctx.obj["company_id"], name=name)
    click.echo(f"Created payee '{name.strip()}' (ID: {payee_id})")


@payee_group.command("list")
@click.pass_context
def list_payees(ctx):
    """List payees."""
    service = DirectoryService(ctx.obj["db"])
    payees = service.list_payees(ctx.obj["company_id"])
    if not payees:
        click.echo("No payees found.")
        return

    for payee in payees:
        click.echo(f"ID: {payee.id:3d} | {payee.name}")


def register_commands(cli):
    """Register payee commands with main CLI."""
    cli.add_command(payee_group)
