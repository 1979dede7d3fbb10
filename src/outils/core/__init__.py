"""Core layer — pure helpers with no filesystem access.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; environment reads only.
* No imports from ``cli`` or ``infra``.

The public names are re-exported from :mod:`outils`; this package
deliberately imports nothing so that :mod:`outils.config` can depend on
:mod:`outils.core.environment` without an import cycle.
"""
