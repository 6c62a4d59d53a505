"""AI advisor command."""

import json

import click
from farmledger.insights.client import GeminiClient
from farmledger.insights.service import InsightsService


@click.command("insights")
@click.option("--json", "as_json", is_flag=True, help="Print the raw three-field JSON reply")
@click.pass_context
def insights(ctx, as_json: bool):
    """Ask the AI advisor to analyse the farm."""
    ledger = ctx.obj["ledger"]
    client = ctx.obj.get("insights_client") or GeminiClient()
    service = InsightsService(client)

    result = service.refresh(ledger.state)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    click.echo(f"\n{result.summary}")
    click.echo("\nWarnings:")
    for warning in result.warnings:
        click.echo(f"  ! {warning}")
    click.echo("\nRecommendations:")
    for recommendation in result.recommendations:
        click.echo(f"  - {recommendation}")


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(insights)
