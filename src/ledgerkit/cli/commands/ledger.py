"""Journal reporting and repair commands."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import reports_errors
from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.resync import ResyncEngine


@click.command("journal")
@period_options
@click.option("--account", help="Only lines posted to this account")
@click.option("--transaction", "transaction_id", type=int, help="Only lines of this transaction")
@click.pass_context
def show_journal(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    account: str | None,
    transaction_id: int | None,
):
    """Show journal lines ordered by date and transaction."""
    db = ctx.obj["db"]
    company_id = ctx.obj["company_id"]
    directory = DirectoryService(db)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    account_id = resolve_account_or_exit(ctx, account) if account else None

    lines = LedgerService(db).list_journal(
        company_id, start_date=start, end_date=end, account_id=account_id, transaction_id=transaction_id
    )
    if not lines:
        click.echo("No journal lines found.")
        return

    click.echo(f"{'Txn':>5}  {'Date':10}  {'Account':32}  {'Debit':>12}  {'Credit':>12}  Description")
    click.echo("-" * 100)
    for line in lines:
        path = directory.format_account_path(line.account_id, company_id) or f"#{line.account_id}"
        debit = line.debit.to_fixed() if not line.debit.is_zero() else ""
        credit = line.credit.to_fixed() if not line.credit.is_zero() else ""
        click.echo(
            f"{line.transaction_id:>5}  {line.date.isoformat():10}  {path[:32]:32}  "
            f"{debit:>12}  {credit:>12}  {line.description}"
        )


@click.command("trial-balance")
@period_options
@click.pass_context
def trial_balance(ctx, start_date: str | None, end_date: str | None, period: str | None):
    """Show debit and credit totals per account."""
    db = ctx.obj["db"]
    company_id = ctx.obj["company_id"]
    directory = DirectoryService(db)
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    report = LedgerService(db).trial_balance(company_id, start_date=start, end_date=end)
    if not report.rows:
        click.echo("No journal lines found.")
        return

    click.echo(f"{'Account':40}  {'Type':9}  {'Debit':>12}  {'Credit':>12}  {'Balance':>12}")
    click.echo("-" * 93)
    for row in report.rows:
        path = directory.format_account_path(row.account.id, company_id)
        click.echo(
            f"{path[:40]:40}  {row.account.type.value:9}  {row.debit_total.to_fixed():>12}  "
            f"{row.credit_total.to_fixed():>12}  {row.balance.to_fixed():>12}"
        )
    click.echo("-" * 93)
    click.echo(
        f"{'Total':40}  {'':9}  {report.debit_total.to_fixed():>12}  {report.credit_total.to_fixed():>12}"
    )
    if not report.is_balanced:
        click.echo("Warning: debits and credits do not match; run 'ledgerkit check'.", err=True)


@click.command("check")
@click.pass_context
def check_journal(ctx):
    """Compare confirmed transactions with the journal.

    Exits with status 1 when drift is found, so it can gate a resync.
    """
    report = LedgerService(ctx.obj["db"]).find_drift(ctx.obj["company_id"])
    if report.is_clean:
        click.echo("Journal is in sync with confirmed transactions.")
        return

    if report.missing_lines:
        click.echo(f"Transactions without journal lines: {', '.join(map(str, report.missing_lines))}")
    if report.unbalanced:
        click.echo(f"Transactions with unbalanced lines: {', '.join(map(str, report.unbalanced))}")
    if report.orphan_lines:
        click.echo(f"Journal lines without a transaction: {', '.join(map(str, report.orphan_lines))}")
    click.echo("Run 'ledgerkit resync' to rebuild the journal.")
    ctx.exit(1)


@click.command("resync")
@click.pass_context
@reports_errors
def resync(ctx):
    """Rebuild the company's journal from its confirmed transactions."""
    result = ResyncEngine(ctx.obj["db"]).resync_all(ctx.obj["company_id"])
    click.echo(f"Rebuilt {result.lines} journal line(s) from {result.transactions} transaction(s)")


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(show_journal)
    cli.add_command(trial_balance)
    cli.add_command(check_journal)
    cli.add_command(resync)
