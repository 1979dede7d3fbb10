"""``outils check`` — static validation of literal constructor calls.

Scans Python sources for ``url``/``link``/``mail_to``/``date`` calls,
validates their literal arguments without running the code, and
renders a summary table.  Intended for CI: the exit code is non-zero
whenever any literal is invalid.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from outils.cli import exit_codes
from outils.cli.console import console, escape, rich_available
from outils.infra.source_scanner import LiteralFinding, ScanReport, scan_paths


def _row(finding: LiteralFinding) -> tuple[str, str, str, str]:
    text = repr(finding.text) if finding.text is not None else "<expression>"
    return finding.location, str(finding.kind), text, finding.error or ""


def _summary(report: ScanReport) -> str:
    return (
        f"{len(report.findings)} literal(s) in {len(report.files)} file(s), "
        f"{len(report.failures)} invalid"
    )


def _print_plain_report(report: ScanReport, rows: list[tuple[str, str, str, str]]) -> None:
    for location, kind, text, error in rows:
        print(f"{location}: {kind} {text}: {error}", file=sys.stderr)
    print(_summary(report), file=sys.stderr)


def _print_rich_report(report: ScanReport, rows: list[tuple[str, str, str, str]]) -> None:
    from rich.table import Table

    if rows:
        table = Table(
            title="Invalid literals",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Location", style="bold")
        table.add_column("Kind")
        table.add_column("Literal")
        table.add_column("Problem", style="red")
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        console.print(table)

    style = "bold green" if report.ok else "bold red"
    console.print(f"[{style}]{_summary(report)}[/{style}]")


def run_check(paths: Sequence[Path]) -> int:
    """Scan *paths* and render every invalid literal.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all literals are valid,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    report = scan_paths(paths)
    rows = [_row(finding) for finding in report.failures]

    if rich_available():
        _print_rich_report(report, rows)
    else:
        _print_plain_report(report, rows)

    return exit_codes.SUCCESS if report.ok else exit_codes.GENERAL_ERROR
