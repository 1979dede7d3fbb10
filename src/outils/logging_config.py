"""Logging setup for the outils CLI.

Library modules only ever call ``logging.getLogger(__name__)``; the
package installs a :class:`logging.NullHandler` so nothing is emitted
unless an application configures logging.  The CLI calls
:func:`setup_logging` once at start-up.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "outils-cli"


def setup_logging(level: str = "WARNING", *, verbose: bool = False) -> None:
    """Attach a stderr handler to the ``outils`` logger.

    Args:
        level: Logging level name; unknown names fall back to WARNING.
        verbose: Force DEBUG regardless of *level*.
    """
    numeric_level = logging.DEBUG if verbose else getattr(
        logging, level.upper(), logging.WARNING
    )
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    package_logger = logging.getLogger("outils")
    package_logger.setLevel(numeric_level)

    # Re-running setup replaces our handler instead of stacking a second one.
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    package_logger.addHandler(handler)
