"""Inventory commands."""

import click
from farmledger.cli.error_handling import handle_domain_error, report_sync_status
from farmledger.domain.entities import INVENTORY_CATEGORIES, Category
from farmledger.domain.errors import DomainError
from farmledger.domain.inventory import InventoryService, is_low_stock
from farmledger.utils.amount_parser import parse_amount

CATEGORY_CHOICES = [c.value for c in INVENTORY_CATEGORIES]


def _quantity(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid quantity: {e}", err=True)
        ctx.exit(1)


@click.group()
def inventory_group():
    """Manage feed and medicine stock."""
    pass


@inventory_group.command("add")
@click.argument("name")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False), default="FEED", show_default=True)
@click.option("--quantity", required=True, help="Quantity on hand")
@click.option("--unit", default="kg", show_default=True, help="Unit, e.g. bag, kg, bottle")
@click.option("--min-threshold", default="5", show_default=True, help="Low-stock threshold")
@click.pass_context
def add_item(ctx, name: str, category: str, quantity: str, unit: str, min_threshold: str):
    """Add a stock item.

    Examples:
        farmledger inventory add "Starter feed" --quantity 10 --unit bag --min-threshold 3
        farmledger inventory add "Vitamin" --category MEDICINE --quantity 4 --unit bottle
    """
    ledger = ctx.obj["ledger"]
    service = InventoryService(ledger)

    try:
        item = service.add_item(
            name=name,
            category=Category(category.upper()),
            current_quantity=_quantity(ctx, quantity),
            unit=unit,
            min_threshold=_quantity(ctx, min_threshold),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added '{item.name}' (ID: {item.id}): {item.current_quantity} {item.unit}")
    report_sync_status(ledger)


@inventory_group.command("list")
@click.option("--low", is_flag=True, help="Only items below their threshold")
@click.pass_context
def list_items(ctx, low: bool):
    """List stock items."""
    service = InventoryService(ctx.obj["ledger"])

    items = service.low_stock_items() if low else service.list_items()
    if not items:
        click.echo("No inventory items found.")
        return

    click.echo("\nInventory:")
    click.echo("-" * 90)
    for item in items:
        flag = "  LOW" if is_low_stock(item) else ""
        click.echo(
            f"{item.id} | {item.name:<20} | {item.category.value:<8} | "
            f"{item.current_quantity} {item.unit} (min {item.min_threshold}){flag}"
        )


@inventory_group.command("update")
@click.argument("item_id")
@click.option("--name")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.option("--quantity")
@click.option("--unit")
@click.option("--min-threshold")
@click.pass_context
def update_item(
    ctx,
    item_id: str,
    name: str | None,
    category: str | None,
    quantity: str | None,
    unit: str | None,
    min_threshold: str | None,
):
    """Update a stock item; only given fields change."""
    ledger = ctx.obj["ledger"]
    service = InventoryService(ledger)

    fields = {
        "name": name,
        "category": Category(category.upper()) if category else None,
        "current_quantity": _quantity(ctx, quantity),
        "unit": unit,
        "min_threshold": _quantity(ctx, min_threshold),
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        item = service.update_item(item_id, **fields)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated '{item.name}': {item.current_quantity} {item.unit}")
    report_sync_status(ledger)


@inventory_group.command("delete")
@click.argument("item_id")
@click.pass_context
def delete_item(ctx, item_id: str):
    """Delete a stock item."""
    ledger = ctx.obj["ledger"]
    service = InventoryService(ledger)

    try:
        service.delete_item(item_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted inventory item {item_id}. Run 'farmledger undo' to restore it.")
    report_sync_status(ledger)


def register_commands(cli):
    """Register inventory commands with main CLI."""
    cli.add_command(inventory_group, name="inventory")
