"""``outils env`` — show variables through the typed environment accessor."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from outils.cli import exit_codes
from outils.cli.console import console, escape, rich_available
from outils.core.environment import COERCIONS, Environment


def collect_rows(
    keys: Sequence[str],
    coercion: str,
    env: Environment,
) -> list[tuple[str, str, str]]:
    """Return ``(variable, raw, coerced)`` rows for *keys*."""
    coerce = COERCIONS[coercion]
    rows: list[tuple[str, str, str]] = []
    for key in keys:
        raw = env.raw_value(key)
        rows.append(
            (
                env.key_for(key),
                raw if raw is not None else "<unset>",
                repr(env.value(key, coerce)),
            )
        )
    return rows


def run_env(
    keys: Sequence[str],
    *,
    coercion: str = "str",
    namespace: str | None = None,
    env: Environment | None = None,
) -> int:
    """Render each key's raw and coerced value."""
    source = env if env is not None else Environment()
    rows = collect_rows(keys, coercion, source.with_namespace(namespace))

    if rich_available():
        from rich.table import Table

        table = Table(show_header=True, header_style="bold cyan", border_style="dim")
        table.add_column("Variable", style="bold")
        table.add_column("Raw")
        table.add_column(f"As {coercion}")
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        console.print(table)
    else:
        for variable, raw, value in rows:
            print(f"{variable}={raw} -> {value}", file=sys.stderr)

    return exit_codes.SUCCESS
