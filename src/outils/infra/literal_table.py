"""Literal tables and generation of pre-validated constant modules.

A literal table is a TOML file with one section per literal kind::

    [link]
    HOMEPAGE = "https://example.com"

    [mail_to]
    SUPPORT = "help@example.com"

    [date]
    LAUNCH = "08-22-1995"

:func:`generate_module` validates every entry and writes a Python module
declaring one typed constant per entry.  If any entry is invalid the
output file is left untouched.
"""

from __future__ import annotations

import datetime
import keyword
import logging
import os
import tempfile
import tomllib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from outils.core.literals import LiteralKind, LiteralSpec, validate_literals
from outils.exceptions import SourceScanError
from outils.version import __version__

logger = logging.getLogger(__name__)

_CONSTRUCTOR_NAMES: dict[LiteralKind, str] = {
    LiteralKind.URL: "url",
    LiteralKind.LINK: "link",
    LiteralKind.MAIL_TO: "mail_to",
}

RESERVED_NAMES: frozenset[str] = frozenset(
    {"URL", "datetime", "__all__", *_CONSTRUCTOR_NAMES.values()}
)
"""Names bound by the generated module itself; not usable as constants."""


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _parse_sections(data: dict[str, Any], path: Path) -> list[LiteralSpec]:
    specs: list[LiteralSpec] = []
    seen: set[str] = set()
    for section, entries in data.items():
        try:
            kind = LiteralKind(section)
        except ValueError:
            known = ", ".join(kind.value for kind in LiteralKind)
            raise SourceScanError(
                f"Unknown section [{section}] in {path}",
                hint=f"Valid sections: {known}",
            ) from None
        if not isinstance(entries, dict):
            raise SourceScanError(f"Section [{section}] in {path} must be a table")
        for name, text in entries.items():
            if not name.isidentifier():
                raise SourceScanError(
                    f"{name!r} in [{section}] is not a valid Python identifier",
                )
            if keyword.iskeyword(name) or name in RESERVED_NAMES:
                raise SourceScanError(
                    f"{name!r} in [{section}] is reserved in the generated module",
                    hint=f"Reserved names: {', '.join(sorted(RESERVED_NAMES))} and Python keywords.",
                )
            if not isinstance(text, str):
                raise SourceScanError(
                    f"{section}.{name} in {path} must be a string, not {type(text).__name__}",
                )
            if name in seen:
                raise SourceScanError(f"{name} is declared more than once in {path}")
            seen.add(name)
            specs.append(LiteralSpec(name=name, kind=kind, text=text))
    return specs


def load_table(path: Path) -> list[LiteralSpec]:
    """Read a literal table without validating the literals themselves.

    Raises
    ------
    SourceScanError
        When the file is unreadable, not TOML, or structurally invalid.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceScanError(f"Cannot read {path}: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise SourceScanError(f"Invalid TOML in {path}: {exc}") from exc
    return _parse_sections(data, path)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_constant(spec: LiteralSpec, value: Any) -> str:
    if isinstance(value, datetime.date):
        return (
            f"{spec.name}: datetime.date = "
            f"datetime.date({value.year}, {value.month}, {value.day})"
        )
    return f"{spec.name}: URL = {_CONSTRUCTOR_NAMES[spec.kind]}({spec.text!r})"


def render_module(
    specs: Sequence[LiteralSpec],
    values: dict[str, Any],
    *,
    source_name: str = "literal table",
) -> str:
    """Render validated *values* as Python source.

    Constants are emitted sorted by name.  URL constants are rebuilt
    through their constructors; dates become ``datetime.date`` calls.
    """
    ordered = sorted(specs, key=lambda spec: spec.name)
    kinds = {spec.kind for spec in ordered}

    lines = [
        f"# Generated by outils {__version__} from {source_name}. Do not edit.",
        '"""Pre-validated literal constants."""',
        "",
        "from __future__ import annotations",
        "",
    ]
    if LiteralKind.DATE in kinds:
        lines.extend(["import datetime", ""])
    imported = sorted(
        {_CONSTRUCTOR_NAMES[kind] for kind in kinds if kind in _CONSTRUCTOR_NAMES}
    )
    if imported:
        lines.extend([f"from outils import {', '.join(['URL', *imported])}", ""])
    lines.append("")
    lines.extend(_render_constant(spec, values[spec.name]) for spec in ordered)
    lines.append("")
    names = ", ".join(f'"{spec.name}"' for spec in ordered)
    lines.append(f"__all__ = [{names}]")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def generate_module(table_path: Path, output_path: Path) -> list[LiteralSpec]:
    """Validate *table_path* and write the constants module to *output_path*.

    Returns the validated specs.

    Raises
    ------
    SourceScanError
        When the table cannot be loaded or the output cannot be written.
    LiteralCheckError
        When any literal is invalid; nothing is written in that case.
    """
    specs = load_table(table_path)
    values = validate_literals(specs)
    text = render_module(specs, values, source_name=table_path.name)
    try:
        _write_atomic(output_path, text)
    except OSError as exc:
        raise SourceScanError(f"Cannot write {output_path}: {exc}") from exc
    logger.info("Wrote %d constant(s) to %s", len(specs), output_path)
    return specs
