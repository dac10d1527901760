"""CLI argument parsers and validators."""

from __future__ import annotations

import typer

from ..core.models import OverwritePolicy


def parse_overwrite(value: str | None) -> OverwritePolicy:
    """Parse an overwrite policy: none, false, true or delete."""
    try:
        return OverwritePolicy.coerce(value)
    except ValueError as e:
        raise typer.BadParameter(
            f"Must be one of none, false, true, delete; got: {value!r}"
        ) from e


def parse_assignments(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``KEY=VALUE`` options into a placeholder mapping."""
    assignments: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got: {item!r}")
        assignments[key] = value
    return assignments
