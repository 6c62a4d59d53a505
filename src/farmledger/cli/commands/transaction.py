"""Transaction ledger commands."""

import click
from farmledger.cli.error_handling import handle_domain_error, report_sync_status
from farmledger.cli.flock_resolution import resolve_flock_or_exit
from farmledger.domain.entities import Category, TransactionType
from farmledger.domain.errors import DomainError
from farmledger.domain.flock import FlockService
from farmledger.domain.transaction import TransactionService
from farmledger.utils.amount_parser import parse_amount
from farmledger.utils.date_parser import PERIODS, get_date_range, parse_date

CATEGORY_CHOICES = [c.value for c in Category]
TYPE_CHOICES = [t.value for t in TransactionType]


@click.group()
def transaction_group():
    """Manage the income and expense ledger."""
    pass


@transaction_group.command("add")
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), required=True)
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False), required=True)
@click.option("--amount", required=True, help="Amount (e.g., 1500 or 1,500.50)")
@click.option("--date", "date_str", default="today", show_default=True, help="Date (YYYY-MM-DD, 'today', 'yesterday')")
@click.option("--description", default="", help="Description")
@click.option("--flock", help="Flock ID or batch name to attribute the entry to")
@click.pass_context
def add_transaction(
    ctx,
    txn_type: str,
    category: str,
    amount: str,
    date_str: str,
    description: str,
    flock: str | None,
):
    """Record an income or expense.

    Examples:
        farmledger transaction add --type EXPENSE --category FEED --amount 3200 --flock "Batch A"
        farmledger transaction add --type INCOME --category SALES --amount 45000 --date 2024-03-01
    """
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    flock_id = None
    if flock:
        flock_id = resolve_flock_or_exit(ctx, FlockService(ledger), flock).id

    try:
        txn = service.add_transaction(
            date=txn_date,
            type=TransactionType(txn_type.upper()),
            category=Category(category.upper()),
            amount=txn_amount,
            description=description,
            flock_id=flock_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  {txn.type.value} / {txn.category.value}: {txn.amount:,.2f}")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    report_sync_status(ledger)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
@click.option("--flock", help="Only entries attributed to this flock (ID or batch name)")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    flock: str | None,
    category: str | None,
):
    """List transactions, most recent first."""
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    if period and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    start = end = None
    try:
        if period:
            start, end = get_date_range(period)
        if start_date:
            start = parse_date(start_date)
        if end_date:
            end = parse_date(end_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    flock_id = resolve_flock_or_exit(ctx, FlockService(ledger), flock).id if flock else None

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        flock_id=flock_id,
        category=Category(category.upper()) if category else None,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<34} {'Date':<12} {'Category':<18} {'Amount':>14} {'Batch':<14} {'Description':<20}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        sign = "+" if txn.type == TransactionType.INCOME else "-"
        amount_str = f"{sign}{txn.amount:,.2f}"
        click.echo(
            f"{txn.id:<34} {str(txn.date):<12} {txn.category.value:<18} {amount_str:>14} "
            f"{(service.flock_name_for(txn) or '')[:14]:<14} {txn.description[:20]:<20}"
        )

    totals = service.get_summary(transactions)
    click.echo("-" * 110)
    click.echo(
        f"Income: {totals.total_income:,.2f}  Expense: {totals.total_expense:,.2f}  "
        f"Balance: {totals.balance:,.2f}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str) -> None:
    """Delete a transaction."""
    ledger = ctx.obj["ledger"]
    service = TransactionService(ledger)

    if service.delete_transaction(transaction_id):
        click.echo(f"Deleted transaction {transaction_id}. Run 'farmledger undo' to restore it.")
    else:
        click.echo(f"Transaction {transaction_id} not found, nothing deleted.")
    report_sync_status(ledger)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
