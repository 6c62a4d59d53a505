"""Dashboard summary command."""

import click
from farmledger.domain.inventory import InventoryService
from farmledger.domain.summary import compute_dashboard_stats


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show the farm dashboard: birds, mortality, balance and stock alerts."""
    ledger = ctx.obj["ledger"]
    stats = compute_dashboard_stats(ledger.state)

    click.echo("\nFarm dashboard")
    click.echo("-" * 50)
    click.echo(f"{'Birds alive':<30} {stats.total_birds:>19,}")
    click.echo(f"{'Birds placed':<30} {stats.initial_birds:>19,}")
    click.echo(f"{'Mortality':<30} {stats.total_mortality:>19,}")
    click.echo(f"{'Mortality rate':<30} {stats.mortality_rate:>18.1f}%")
    click.echo("-" * 50)
    click.echo(f"{'Income':<30} {stats.total_income:>19,.2f}")
    click.echo(f"{'Expense':<30} {stats.total_expense:>19,.2f}")
    click.echo(f"{'Balance':<30} {stats.balance:>19,.2f}")
    click.echo("-" * 50)
    click.echo(f"{'Low stock items':<30} {stats.low_stock_count:>19}")

    for item in InventoryService(ledger).low_stock_items():
        click.echo(f"  ! {item.name}: {item.current_quantity} {item.unit} (min {item.min_threshold})")

    if stats.low_stock_count == 0:
        click.echo("  Stock is sufficient.")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
