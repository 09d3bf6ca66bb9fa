"""Commands that confirm staged transactions into the ledger."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit, resolve_payee_or_exit
from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.domain.entities import ConfirmedTransaction, MoveRequest
from ledgerkit.domain.mover import ConfirmationMover


def _describe(transaction: ConfirmedTransaction) -> str:
    amount = transaction.spent if transaction.spent.is_positive() else transaction.received
    kind = "split " if transaction.split_allocation else ""
    return f"Transaction {transaction.id}: {kind}{amount.to_fixed()} on {transaction.date.isoformat()}"


@click.command("move")
@click.argument("imported_id", type=int)
@click.option("--category", help="Category name, path or ID (not needed when the row is split)")
@click.option("--corresponding", required=True, help="Corresponding bank/source account")
@click.option("--payee", help="Payee name or ID")
@click.pass_context
@reports_errors
def move_transaction(ctx, imported_id: int, category: str | None, corresponding: str, payee: str | None):
    """Categorize a staged transaction and post it to the journal.

    Examples:
        ledgerkit move 12 --category "Office Supplies" --corresponding Checking
        ledgerkit move 13 --corresponding Checking   # staged row already split
    """
    selected_id = resolve_account_or_exit(ctx, category) if category else None
    corresponding_id = resolve_account_or_exit(ctx, corresponding)
    payee_id = resolve_payee_or_exit(ctx, payee) if payee else None

    mover = ConfirmationMover(ctx.obj["db"])
    confirmed = mover.move_one(imported_id, selected_id, corresponding_id, payee_id=payee_id)
    click.echo(f"Moved staged transaction {imported_id}")
    click.echo(_describe(confirmed))


@click.command("move-many")
@click.argument("imported_ids", nargs=-1, required=True, type=int)
@click.option("--category", help="Category for every transaction (not needed for split rows)")
@click.option("--corresponding", required=True, help="Corresponding bank/source account")
@click.option("--payee", help="Payee name or ID")
@click.pass_context
@reports_errors
def move_many_transactions(
    ctx, imported_ids: tuple[int, ...], category: str | None, corresponding: str, payee: str | None
):
    """Categorize several staged transactions the same way, all or nothing.

    Examples:
        ledgerkit move-many 3 4 5 --category Rent --corresponding Checking
    """
    selected_id = resolve_account_or_exit(ctx, category) if category else None
    corresponding_id = resolve_account_or_exit(ctx, corresponding)
    payee_id = resolve_payee_or_exit(ctx, payee) if payee else None

    requests = [
        MoveRequest(
            imported_id=imported_id,
            selected_category_id=selected_id,
            corresponding_category_id=corresponding_id,
            payee_id=payee_id,
        )
        for imported_id in imported_ids
    ]
    mover = ConfirmationMover(ctx.obj["db"])
    confirmed = mover.move_many(requests)

    click.echo(f"Moved {len(confirmed)} staged transaction(s)")
    for transaction in confirmed:
        click.echo(_describe(transaction))


def register_commands(cli):
    """Register move commands with main CLI."""
    cli.add_command(move_transaction)
    cli.add_command(move_many_transactions)
