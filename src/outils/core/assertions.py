"""Debug-time assertion policy.

An assertion failure is fatal while debug assertions are enabled and a
logged no-op otherwise, letting the caller fall through to its empty
result.  The switch is :attr:`~outils.config.Settings.debug_assertions`,
read at each failure so ``OUTILS_DEBUG_ASSERTIONS`` can be flipped at
runtime.
"""

from __future__ import annotations

import logging

from outils.config import Settings
from outils.utils.callsite import CallSite

logger = logging.getLogger(__name__)


def assertion_failure(
    message: str,
    call_site: CallSite,
    *,
    settings: Settings | None = None,
) -> None:
    """Signal a failed debug assertion at *call_site*.

    Raises
    ------
    AssertionError
        When debug assertions are enabled.
    """
    active = settings if settings is not None else Settings.from_environment()
    if active.debug_assertions:
        raise AssertionError(f"{call_site}: {message}")
    logger.warning("Assertion failed at %s: %s", call_site, message)
