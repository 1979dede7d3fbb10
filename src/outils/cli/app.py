"""CLI application entry point and command routing for outils.

This module is the **sole error boundary** for the command-line tool.
It catches :class:`~outils.exceptions.OutilsError`, ``KeyboardInterrupt``
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Commands
--------
* ``outils check PATH...``            — validate literal constructor calls
* ``outils generate TABLE -o OUTPUT`` — emit a module of validated constants
* ``outils env KEY...``               — show typed environment values
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from outils.cli import exit_codes
from outils.cli.console import console, escape
from outils.config import load_settings
from outils.core.environment import COERCIONS
from outils.exceptions import OutilsError
from outils.logging_config import setup_logging
from outils.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="outils",
        description="Validated literals and typed environment access.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = subparsers.add_parser(
        "check",
        help="Validate literal constructor calls in Python sources.",
    )
    check.add_argument("paths", nargs="+", type=Path, help="Files or directories.")

    generate = subparsers.add_parser(
        "generate",
        help="Generate a module of pre-validated constants from a TOML table.",
    )
    generate.add_argument("table", type=Path, help="Literal table (TOML).")
    generate.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Python module to write.",
    )

    env = subparsers.add_parser(
        "env",
        help="Show environment variables through the typed accessor.",
    )
    env.add_argument("keys", nargs="+", help="Variable names.")
    env.add_argument(
        "--as",
        dest="coercion",
        choices=sorted(COERCIONS),
        default="str",
        help="Coercion applied to each value (default: str).",
    )
    env.add_argument("--namespace", default=None, help="Prefix joined with '_'.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_check(paths: list[Path]) -> int:
    from outils.cli.check import run_check

    return run_check(paths)


def _handle_generate(table: Path, output: Path) -> int:
    from outils.infra.literal_table import generate_module

    specs = generate_module(table, output)
    console.print(
        f"[bold green]Wrote {len(specs)} constant(s)[/bold green] to {escape(str(output))}"
    )
    return exit_codes.SUCCESS


def _handle_env(keys: list[str], coercion: str, namespace: str | None) -> int:
    from outils.cli.env import run_env

    return run_env(keys, coercion=coercion, namespace=namespace)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the outils CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if args.command == "check":
        return _handle_check(args.paths)
    if args.command == "generate":
        return _handle_generate(args.table, args.output)
    return _handle_env(args.keys, args.coercion, args.namespace)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except OutilsError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
