"""CLI error handling helpers."""

import functools
import logging

import click

from ledgerkit.domain.errors import BalanceError, DomainError, PersistenceError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_internal_error(ctx: click.Context, error: Exception) -> None:
    """Render an internal failure (unbalanced journal, failed write) and exit."""
    logger.error("Command failed: %s", error)
    click.echo(f"Internal error: {error}", err=True)
    ctx.exit(2)


def reports_errors(command):
    """Map errors raised by a command callback to CLI output and exit codes.

    The wrapped callback must take the click context as its first argument.
    """

    @functools.wraps(command)
    def wrapper(ctx, *args, **kwargs):
        try:
            return command(ctx, *args, **kwargs)
        except DomainError as e:
            handle_domain_error(ctx, e)
        except (BalanceError, PersistenceError) as e:
            handle_internal_error(ctx, e)

    return wrapper
