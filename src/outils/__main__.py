"""Allow ``python -m outils`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m outils`` behaves identically to the ``outils`` console
script.
"""

from __future__ import annotations

from outils.cli.app import cli

if __name__ == "__main__":
    cli()
