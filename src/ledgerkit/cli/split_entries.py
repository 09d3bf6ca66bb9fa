"""CLI helpers for split allocations given as repeated --entry options."""

import click

from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.domain.amount import Amount
from ledgerkit.domain.entities import SplitEntry
from ledgerkit.domain.errors import ValidationError

ENTRY_HELP = (
    "Split entry as CATEGORY AMOUNT; negative amounts are money spent, "
    "positive amounts money received. Repeat for each category."
)


def split_entry_option(command):
    """Add a repeatable ``--entry CATEGORY AMOUNT`` option to a command."""
    return click.option("--entry", "entries", nargs=2, multiple=True, metavar="CATEGORY AMOUNT", help=ENTRY_HELP)(
        command
    )


def parse_split_entries(ctx: click.Context, entries: tuple[tuple[str, str], ...]) -> tuple[SplitEntry, ...]:
    """Turn (category, signed amount) pairs into split entries, or exit with a CLI error."""
    allocation = []
    for category, raw_amount in entries:
        category_id = resolve_account_or_exit(ctx, category)
        try:
            amount = Amount.parse(raw_amount)
        except ValidationError as e:
            click.echo(f"Error: Invalid amount for '{category}': {e}", err=True)
            ctx.exit(1)
        if amount.is_negative():
            allocation.append(SplitEntry(category_id=category_id, spent=amount.abs(), received=Amount.zero()))
        else:
            allocation.append(SplitEntry(category_id=category_id, spent=Amount.zero(), received=amount))
    return tuple(allocation)
