"""Shared utilities — call-site capture and other cross-cutting helpers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from outils.utils.callsite import CallSite, capture_call_site

__all__: list[str] = ["CallSite", "capture_call_site"]
