"""Manual sync retry command."""

import click


@click.command("sync")
@click.pass_context
def sync(ctx):
    """Save the current farm state to the store again.

    In hybrid mode, changes made while the database was unreachable live in
    the local cache; this pushes them to the database.
    """
    ledger = ctx.obj["ledger"]

    if ledger.retry_sync():
        click.echo("Farm data synced.")
        return

    click.echo(f"Error: sync failed: {ledger.sync_error}", err=True)
    ctx.exit(1)


def register_commands(cli):
    """Register sync command with main CLI."""
    cli.add_command(sync)
