"""Flock management commands."""

import click
from farmledger.cli.error_handling import handle_domain_error, report_sync_status
from farmledger.cli.flock_resolution import resolve_flock_or_exit
from farmledger.domain.errors import DomainError
from farmledger.domain.flock import FlockService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import parse_date


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid number: {e}", err=True)
        ctx.exit(1)


@click.group()
def flock_group():
    """Manage flocks (batches) and their logs."""
    pass


@flock_group.command("create")
@click.argument("batch_name")
@click.option("--count", "initial_count", type=int, required=True, help="Birds placed")
@click.option("--breed", default="", help="Breed")
@click.option("--start-date", default="today", show_default=True, help="Placement date")
@click.pass_context
def create_flock(ctx, batch_name: str, initial_count: int, breed: str, start_date: str):
    """Create a flock.

    Examples:
        farmledger flock create "Batch A" --count 500 --breed Cobb500
    """
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)

    try:
        flock = service.create_flock(
            batch_name=batch_name,
            breed=breed,
            initial_count=initial_count,
            start_date=_parse_date_or_exit(ctx, start_date),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created flock '{flock.batch_name}' (ID: {flock.id}) with {flock.initial_count} birds")
    report_sync_status(ledger)


@flock_group.command("list")
@click.pass_context
def list_flocks(ctx):
    """List all flocks."""
    service = FlockService(ctx.obj["ledger"])

    flocks = service.list_flocks()
    if not flocks:
        click.echo("No flocks found.")
        return

    click.echo("\nFlocks:")
    click.echo("-" * 100)
    for flock in flocks:
        latest = service.latest_weight(flock)
        weight = f"{latest.average_weight:,.0f} g" if latest else "-"
        click.echo(
            f"{flock.id} | {flock.batch_name:<16} | {flock.breed:<12} | since {flock.start_date} | "
            f"{flock.current_count:,}/{flock.initial_count:,} alive | weight {weight}"
        )


@flock_group.command("show")
@click.argument("flock")
@click.pass_context
def show_flock(ctx, flock: str):
    """Show a flock with all of its logs.

    FLOCK can be a flock ID or batch name.
    """
    service = FlockService(ctx.obj["ledger"])
    record = resolve_flock_or_exit(ctx, service, flock)

    click.echo(f"\n{record.batch_name} ({record.id})")
    click.echo(f"  Breed: {record.breed or '-'}")
    click.echo(f"  Start date: {record.start_date}")
    click.echo(f"  Birds: {record.current_count:,} alive of {record.initial_count:,} placed")
    click.echo(f"  Mortality: {record.total_mortality:,}")

    click.echo("\n  Weight logs:")
    for log in record.weight_logs:
        click.echo(f"    {log.date}  {log.average_weight:,.0f} g  (sample {log.sample_size})")
    click.echo("\n  Mortality logs:")
    for log in record.mortality_logs:
        click.echo(f"    {log.date}  {log.count}  {log.reason or ''}")
    click.echo("\n  Feed logs:")
    for log in record.feed_logs:
        click.echo(f"    {log.date}  {log.amount} {log.unit}")


@flock_group.command("update")
@click.argument("flock")
@click.option("--name", "batch_name", help="New batch name")
@click.option("--breed", help="New breed")
@click.option("--start-date", help="New placement date")
@click.pass_context
def update_flock(ctx, flock: str, batch_name: str | None, breed: str | None, start_date: str | None):
    """Update a flock's name, breed or start date."""
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    fields = {}
    if batch_name is not None:
        fields["batch_name"] = batch_name
    if breed is not None:
        fields["breed"] = breed
    if start_date is not None:
        fields["start_date"] = _parse_date_or_exit(ctx, start_date)
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        updated = service.update_flock(record.id, **fields)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated flock '{updated.batch_name}'")
    report_sync_status(ledger)


@flock_group.command("set-count")
@click.argument("flock")
@click.argument("count", type=int)
@click.pass_context
def set_count(ctx, flock: str, count: int):
    """Override the live bird count (administrative correction)."""
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    updated = service.set_current_count(record.id, count)
    click.echo(f"Set '{updated.batch_name}' to {updated.current_count:,} birds")
    report_sync_status(ledger)


@flock_group.command("delete")
@click.argument("flock")
@click.pass_context
def delete_flock(ctx, flock: str):
    """Delete a flock and all of its logs.

    Transactions attributed to the flock are kept.
    """
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    service.delete_flock(record.id)
    click.echo(f"Deleted flock '{record.batch_name}'. Run 'farmledger undo' to restore it.")
    report_sync_status(ledger)


@flock_group.command("mortality")
@click.argument("flock")
@click.argument("count", type=int)
@click.option("--reason", help="Cause of death")
@click.option("--date", "date_str", default="today", show_default=True)
@click.pass_context
def record_mortality(ctx, flock: str, count: int, reason: str | None, date_str: str):
    """Record deaths in a flock."""
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    log = service.record_mortality(record.id, _parse_date_or_exit(ctx, date_str), count, reason)
    updated = service.require_flock(record.id)
    click.echo(f"Recorded {log.count} deaths in '{updated.batch_name}'; {updated.current_count:,} birds alive")
    report_sync_status(ledger)


@flock_group.command("weight")
@click.argument("flock")
@click.argument("average_weight")
@click.option("--sample-size", type=int, default=10, show_default=True)
@click.option("--date", "date_str", default="today", show_default=True)
@click.pass_context
def record_weight(ctx, flock: str, average_weight: str, sample_size: int, date_str: str):
    """Record an average weight sample in grams."""
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    log = service.record_weight(
        record.id,
        _parse_date_or_exit(ctx, date_str),
        _parse_amount_or_exit(ctx, average_weight),
        sample_size,
    )
    click.echo(f"Recorded {log.average_weight:,.0f} g average for '{record.batch_name}'")
    report_sync_status(ledger)


@flock_group.command("feed")
@click.argument("flock")
@click.argument("amount")
@click.option("--unit", default="kg", show_default=True, help="'bag' (50 kg) or 'kg'")
@click.option("--date", "date_str", default="today", show_default=True)
@click.pass_context
def record_feed(ctx, flock: str, amount: str, unit: str, date_str: str):
    """Record feed given to a flock and draw it down from stock."""
    ledger = ctx.obj["ledger"]
    service = FlockService(ledger)
    record = resolve_flock_or_exit(ctx, service, flock)

    log = service.record_feed(
        record.id,
        _parse_date_or_exit(ctx, date_str),
        _parse_amount_or_exit(ctx, amount),
        unit,
    )
    click.echo(f"Recorded {log.amount} {log.unit} of feed for '{record.batch_name}'")
    report_sync_status(ledger)


def register_commands(cli):
    """Register flock commands with main CLI."""
    cli.add_command(flock_group, name="flock")
