"""Printable batch report command."""

from pathlib import Path

import click
from farmledger.cli.flock_resolution import resolve_flock_or_exit
from farmledger.domain.flock import FlockService
from farmledger.domain.report import build_batch_report, render_batch_report


@click.command("report")
@click.argument("flock")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the report to a file")
@click.pass_context
def batch_report(ctx, flock: str, output: str | None):
    """Print the cost and profit report for one flock.

    FLOCK can be a flock ID or batch name.
    """
    ledger = ctx.obj["ledger"]
    record = resolve_flock_or_exit(ctx, FlockService(ledger), flock)

    text = render_batch_report(build_batch_report(record, ledger.state.transactions))
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Report written to {output}")
    else:
        click.echo(text)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(batch_report)
