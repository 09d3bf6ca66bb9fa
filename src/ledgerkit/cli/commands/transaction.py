"""Commands for confirmed transactions: list, edit, undo and delete."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit, resolve_payee_or_exit
from ledgerkit.cli.date_filters import period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.cli.split_entries import parse_split_entries, split_entry_option
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.entities import SimpleCategorization, SplitCategorization
from ledgerkit.domain.mover import ConfirmationMover
from ledgerkit.utils.date_parser import parse_date


@click.command("transactions")
@period_options
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """List confirmed transactions, newest first."""
    db = ctx.obj["db"]
    company_id = ctx.obj["company_id"]
    directory = DirectoryService(db)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    transactions = db.list_transactions(company_id, start_date=start, end_date=end)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':>5}  {'Date':10}  {'Spent':>12}  {'Received':>12}  {'Category':28}  Description")
    click.echo("-" * 100)
    for txn in transactions:
        if txn.split_allocation:
            category = f"[split: {len(txn.split_allocation)} entries]"
        else:
            category = directory.format_account_path(txn.selected_category_id, company_id)
        click.echo(
            f"{txn.id:>5}  {txn.date.isoformat():10}  {txn.spent.to_fixed():>12}  "
            f"{txn.received.to_fixed():>12}  {category[:28]:28}  {txn.description}"
        )


@click.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--category", help="New category name, path or ID")
@split_entry_option
@click.option("--corresponding", help="New corresponding account (kept when omitted)")
@click.option("--payee", help="New payee name or ID")
@click.option("--clear-payee", is_flag=True, help="Remove the payee")
@click.option("--date", "date_str", help="New date")
@click.option("--description", help="New description")
@click.pass_context
@reports_errors
def edit_transaction(
    ctx,
    transaction_id: int,
    category: str | None,
    entries,
    corresponding: str | None,
    payee: str | None,
    clear_payee: bool,
    date_str: str | None,
    description: str | None,
):
    """Recategorize a confirmed transaction and re-derive its journal lines.

    Amounts never change. Give either --category or --entry options.

    Examples:
        ledgerkit edit 4 --category Software
        ledgerkit edit 4 --entry "Office Supplies" -30 --entry Software -20
    """
    if bool(category) == bool(entries):
        click.echo("Error: Provide either --category or --entry options.", err=True)
        ctx.exit(1)
    if payee and clear_payee:
        click.echo("Error: --payee cannot be combined with --clear-payee.", err=True)
        ctx.exit(1)

    corresponding_id = resolve_account_or_exit(ctx, corresponding) if corresponding else None
    if entries:
        categorization = SplitCategorization(
            allocation=parse_split_entries(ctx, entries), corresponding_category_id=corresponding_id
        )
    else:
        categorization = SimpleCategorization(
            selected_category_id=resolve_account_or_exit(ctx, category),
            corresponding_category_id=corresponding_id,
        )

    new_date = None
    if date_str is not None:
        try:
            new_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    kwargs = {}
    if clear_payee:
        kwargs["payee_id"] = None
    elif payee:
        kwargs["payee_id"] = resolve_payee_or_exit(ctx, payee)

    mover = ConfirmationMover(ctx.obj["db"])
    mover.edit(transaction_id, categorization, date=new_date, description=description, **kwargs)
    click.echo(f"Updated transaction {transaction_id}")


@click.command("undo")
@click.argument("transaction_ids", nargs=-1, required=True, type=int)
@click.pass_context
@reports_errors
def undo_transactions(ctx, transaction_ids: tuple[int, ...]):
    """Send confirmed transactions back to staging, all or nothing."""
    mover = ConfirmationMover(ctx.obj["db"])
    if len(transaction_ids) == 1:
        staged = [mover.undo(transaction_ids[0])]
    else:
        staged = mover.undo_many(transaction_ids)
    for row in staged:
        click.echo(f"Returned to staging as {row.id}")


@click.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@reports_errors
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a confirmed transaction and its journal lines."""
    if not yes:
        click.confirm(f"Delete transaction {transaction_id} and its journal lines?", abort=True)
    mover = ConfirmationMover(ctx.obj["db"])
    mover.delete(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(list_transactions)
    cli.add_command(edit_transaction)
    cli.add_command(undo_transactions)
    cli.add_command(delete_transaction)
