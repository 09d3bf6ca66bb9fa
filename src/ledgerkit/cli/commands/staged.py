"""Commands for staged (imported, uncategorized) transactions."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.cli.split_entries import parse_split_entries, split_entry_option
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.staging import StagingService
from ledgerkit.utils.date_parser import parse_date


@click.group("staged")
def staged_group():
    """Manage staged transactions awaiting categorization."""
    pass


@staged_group.command("add")
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--description", default="", help="Bank description")
@click.option("--source", required=True, help="Bank account (chart-of-accounts name, path or ID)")
@click.option("--spent", default="0", help="Money out (e.g., 50.00)")
@click.option("--received", default="0", help="Money in (e.g., 1000.00)")
@split_entry_option
@click.pass_context
@reports_errors
def add_staged(ctx, date_str: str, description: str, source: str, spent: str, received: str, entries):
    """Stage a transaction by hand.

    Examples:
        ledgerkit staged add --date 2024-03-01 --description "Office Depot" --source Checking --spent 50
        ledgerkit staged add --date today --source Checking --spent 50 \\
            --entry "Office Supplies" -30 --entry Software -20
    """
    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    source_id = resolve_account_or_exit(ctx, source)
    allocation = parse_split_entries(ctx, entries) if entries else None

    service = StagingService(ctx.obj["db"])
    imported_id = service.stage(
        company_id=ctx.obj["company_id"],
        date=txn_date,
        description=description,
        source_account_id=source_id,
        spent=spent,
        received=received,
        split_allocation=allocation,
    )
    click.echo(f"Staged transaction {imported_id}")


@staged_group.command("list")
@click.pass_context
def list_staged(ctx):
    """List staged transactions, newest first."""
    db = ctx.obj["db"]
    company_id = ctx.obj["company_id"]
    service = StagingService(db)
    directory = DirectoryService(db)

    rows = service.list_transactions(company_id)
    if not rows:
        click.echo("No staged transactions.")
        return

    click.echo(f"{'ID':>5}  {'Date':10}  {'Spent':>12}  {'Received':>12}  {'Source':20}  Description")
    click.echo("-" * 90)
    for row in rows:
        source = directory.format_account_path(row.source_account_id, company_id)
        split_marker = " [split]" if row.split_allocation else ""
        click.echo(
            f"{row.id:>5}  {row.date.isoformat():10}  {row.spent.to_fixed():>12}  "
            f"{row.received.to_fixed():>12}  {source[:20]:20}  {row.description}{split_marker}"
        )


@staged_group.command("delete")
@click.argument("imported_ids", nargs=-1, required=True, type=int)
@click.pass_context
def delete_staged(ctx, imported_ids: tuple[int, ...]):
    """Delete staged transactions. IDs that are already gone are ignored."""
    service = StagingService(ctx.obj["db"])
    removed = service.delete_many(imported_ids)
    click.echo(f"Deleted {removed} staged transaction(s)")


@staged_group.command("split")
@click.argument("imported_id", type=int)
@split_entry_option
@click.option("--clear", is_flag=True, help="Remove the split allocation")
@click.pass_context
@reports_errors
def split_staged(ctx, imported_id: int, entries, clear: bool):
    """Attach a split allocation to a staged transaction.

    The entries must add up to the transaction's net amount.

    Examples:
        ledgerkit staged split 7 --entry "Office Supplies" -30 --entry Software -20
        ledgerkit staged split 7 --clear
    """
    if clear == bool(entries):
        click.echo("Error: Provide either --entry options or --clear.", err=True)
        ctx.exit(1)

    service = StagingService(ctx.obj["db"])
    if clear:
        service.set_split(imported_id, None)
        click.echo(f"Cleared split for staged transaction {imported_id}")
        return

    allocation = parse_split_entries(ctx, entries)
    service.set_split(imported_id, allocation)
    click.echo(f"Split staged transaction {imported_id} into {len(allocation)} entries")


def register_commands(cli):
    """Register staged commands with main CLI."""
    cli.add_command(staged_group)
