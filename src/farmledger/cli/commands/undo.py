"""Undo command."""

import click
from farmledger.cli.error_handling import report_sync_status


@click.command("undo")
@click.pass_context
def undo(ctx):
    """Restore the farm to how it was before the last delete.

    Only the most recent delete can be undone, and any other change since
    then makes it final.
    """
    ledger = ctx.obj["ledger"]
    message = ledger.undo_message

    if not ledger.undo():
        click.echo("Nothing to undo.")
        return

    click.echo(f"Undone: {message}")
    report_sync_status(ledger)


def register_commands(cli):
    """Register undo command with main CLI."""
    cli.add_command(undo)
