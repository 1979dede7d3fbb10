"""Infrastructure layer — filesystem integration.

Source scanning for literal constructor calls, literal-table loading,
and generation of pre-validated constant modules.  Every I/O or parse
failure is re-raised as a :class:`~outils.exceptions.OutilsError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from outils.infra.literal_table import generate_module, load_table, render_module
from outils.infra.source_scanner import LiteralFinding, ScanReport, scan_paths, scan_source

__all__: list[str] = [
    "LiteralFinding",
    "ScanReport",
    "generate_module",
    "load_table",
    "render_module",
    "scan_paths",
    "scan_source",
]
