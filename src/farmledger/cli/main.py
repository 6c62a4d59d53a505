"""Main CLI entry point."""

import logging

import click
from farmledger.database.factories import STORAGE_MODES, create_store, create_undo_journal
from farmledger.domain.ledger import FarmLedger

# Import and register all commands at module level
from farmledger.cli.commands import (
    transaction,
    flock,
    inventory,
    summary,
    report,
    insights,
    sync,
    undo,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FARMLEDGER_DB_PATH environment variable)",
    envvar="FARMLEDGER_DB_PATH",
)
@click.option(
    "--cache-path",
    type=click.Path(),
    help="Path to local JSON cache (overrides FARMLEDGER_CACHE_PATH environment variable)",
    envvar="FARMLEDGER_CACHE_PATH",
)
@click.option(
    "--mode",
    type=click.Choice(STORAGE_MODES, case_sensitive=False),
    default="hybrid",
    show_default=True,
    envvar="FARMLEDGER_MODE",
    help="Storage mode: database, local file, database with local fallback, or memory only",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, cache_path: str | None, mode: str, verbose: bool):
    """Farmledger - poultry farm bookkeeping.

    Track flocks, mortality, feed and weight, keep an income/expense ledger
    and feed/medicine stock, and ask an AI advisor for insights.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None and "ledger" not in ctx.obj:
        store = create_store(mode=mode, database_path=db_path, cache_path=cache_path)
        store.connect()
        ctx.call_on_close(store.disconnect)
        ledger = FarmLedger(
            store, undo_journal=create_undo_journal(mode=mode, database_path=db_path, cache_path=cache_path)
        )
        ledger.load()
        ctx.obj["ledger"] = ledger


# Register all commands
transaction.register_commands(cli)
flock.register_commands(cli)
inventory.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)
insights.register_commands(cli)
sync.register_commands(cli)
undo.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
