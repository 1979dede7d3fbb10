"""Shared pytest fixtures and configuration for the outils test suite.

Guidelines
----------
* No network access in any test.
* Tests must not depend on the host environment: ``OUTILS_*``
  variables are cleared before every test.
* Filesystem work happens under ``tmp_path`` only.
* The CLI installs a stderr handler on the ``outils`` logger; it is
  removed again after every test.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _isolate_outils_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("OUTILS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_outils_logger() -> Iterator[None]:
    package_logger = logging.getLogger("outils")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
