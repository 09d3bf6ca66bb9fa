"""CLI helpers for account and payee resolution."""

from __future__ import annotations

import click

from ledgerkit.domain.directory import DirectoryService
from ledgerkit.domain.errors import InvalidReferenceError
from ledgerkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, account: str | int) -> int:
    """Resolve account name, path or ID in the current company, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    directory = DirectoryService(ctx.obj["db"])
    try:
        return resolve_account(directory, ctx.obj["company_id"], account)
    except InvalidReferenceError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_payee_or_exit(ctx: click.Context, payee: str | int) -> int:
    """Resolve payee name or ID in the current company, or exit with a CLI error."""
    directory = DirectoryService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]
    try:
        if str(payee).strip().isdigit():
            return directory.require_payee(int(payee), company_id).id
        for existing in directory.list_payees(company_id):
            if existing.name == str(payee).strip():
                return existing.id
        raise InvalidReferenceError(f"Payee '{payee}' not found in company '{company_id}'")
    except InvalidReferenceError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
