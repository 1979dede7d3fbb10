"""Package settings loaded from ``OUTILS_*`` environment variables.

Settings are resolved through an :class:`~outils.core.environment.EnvironmentTable`
so every option has exactly one coercion and one default:

* ``OUTILS_LOG_LEVEL`` (str, ``WARNING``)
* ``OUTILS_DEBUG_ASSERTIONS`` (bool, ``__debug__``)
* ``OUTILS_TEXT_DOMAIN`` (str, ``outils``)
* ``OUTILS_LOCALE_DIR`` (str, unset)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from outils.core.environment import (
    Environment,
    EnvironmentKey,
    EnvironmentTable,
    coerce_bool,
    coerce_str,
)

ENV_NAMESPACE = "OUTILS"

SETTINGS_TABLE = EnvironmentTable(
    [
        EnvironmentKey("LOG_LEVEL", coerce_str, "WARNING"),
        EnvironmentKey("DEBUG_ASSERTIONS", coerce_bool, __debug__),
        EnvironmentKey("TEXT_DOMAIN", coerce_str, "outils"),
        EnvironmentKey("LOCALE_DIR", coerce_str),
    ],
    namespace=ENV_NAMESPACE,
)


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime configuration."""

    log_level: str = "WARNING"
    """Name of the logging level used by the CLI."""

    debug_assertions: bool = __debug__
    """Whether assertion failures raise (``True``) or only log (``False``)."""

    text_domain: str = "outils"
    """gettext domain used by :func:`~outils.core.strings.localized`."""

    locale_dir: str | None = None
    """Directory holding compiled ``.mo`` catalogues, if any."""

    @classmethod
    def from_environment(cls, env: Environment | None = None) -> Settings:
        """Resolve settings from *env* (the process environment by default)."""
        values = SETTINGS_TABLE.resolve(env)
        return cls(
            log_level=str(values["LOG_LEVEL"]).upper(),
            debug_assertions=bool(values["DEBUG_ASSERTIONS"]),
            text_domain=str(values["TEXT_DOMAIN"]),
            locale_dir=values["LOCALE_DIR"],
        )


def load_settings(dotenv_path: str | Path | None = None) -> Settings:
    """Load settings, optionally layering a ``.env`` file under the process env.

    Process variables always win over values from *dotenv_path*.
    """
    if dotenv_path is None:
        return Settings.from_environment()

    from dotenv import dotenv_values

    merged = {
        key: value
        for key, value in dotenv_values(dotenv_path).items()
        if value is not None
    }
    merged.update(os.environ)
    return Settings.from_environment(Environment(merged))
