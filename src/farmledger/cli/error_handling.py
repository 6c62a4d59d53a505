"""CLI error handling helpers."""

import click

from farmledger.domain.errors import DomainError
from farmledger.domain.ledger import FarmLedger


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_sync_status(ledger: FarmLedger) -> None:
    """Warn when the last save did not reach the store."""
    if ledger.sync_error is None:
        return
    click.echo(f"Warning: changes not synced: {ledger.sync_error}", err=True)
    if ledger.sync_error.recoverable:
        click.echo("Run 'farmledger sync' to retry.", err=True)
