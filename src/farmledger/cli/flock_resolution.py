"""CLI helpers for flock resolution."""

from __future__ import annotations

import click
from farmledger.domain.entities import Flock
from farmledger.domain.flock import FlockService

MIN_ID_PREFIX = 4


def resolve_flock(flock_service: FlockService, flock: str) -> Flock:
    """Resolve a flock by ID, batch name, or unique ID prefix.

    Prefixes shorter than MIN_ID_PREFIX characters are not tried.

    Raises:
        ValueError: If the reference is blank, or no flock or more than one flock matches
    """
    flock = (flock or "").strip()
    if not flock:
        raise ValueError("Flock reference is empty")

    found = flock_service.get_flock(flock)
    if found is not None:
        return found

    flocks = flock_service.list_flocks()
    by_name = [f for f in flocks if f.batch_name == flock]
    if len(by_name) == 1:
        return by_name[0]
    if len(by_name) > 1:
        raise ValueError(f"Batch name '{flock}' is ambiguous; use the flock ID")

    by_prefix = [f for f in flocks if f.id.startswith(flock)] if len(flock) >= MIN_ID_PREFIX else []
    if len(by_prefix) == 1:
        return by_prefix[0]

    raise ValueError(f"Flock '{flock}' not found")


def resolve_flock_or_exit(ctx: click.Context, flock_service: FlockService, flock: str) -> Flock:
    """Resolve a flock, or exit with a CLI error."""
    try:
        return resolve_flock(flock_service, flock)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
