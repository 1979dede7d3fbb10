"""Static check of literal constructor calls in Python sources.

Sources are parsed with :mod:`ast` and never executed.  A call is
checked when its callee resolves, through the module's imports, to one
of the constructors in :mod:`outils.core.literals`::

    from outils import link            ->  link("...")
    from outils.core.literals import date as d   ->  d("...")
    import outils                      ->  outils.url("...")

Each checked call must pass exactly one string literal, which is then
validated with the same constructor used at runtime.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from outils.core.literals import LiteralKind, parse_literal
from outils.exceptions import InvalidLiteralError, SourceScanError

logger = logging.getLogger(__name__)

LITERAL_MODULES: frozenset[str] = frozenset({"outils", "outils.core.literals"})
"""Modules whose constructor names are recognised."""

CONSTRUCTORS: dict[str, LiteralKind] = {
    "url": LiteralKind.URL,
    "link": LiteralKind.LINK,
    "mail_to": LiteralKind.MAIL_TO,
    "date": LiteralKind.DATE,
}

NOT_A_LITERAL = "argument must be a single string literal"

_SKIPPED_DIRS = frozenset({"__pycache__", ".git", ".venv", "venv", "build", "dist"})


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LiteralFinding:
    """One checked constructor call."""

    path: Path
    line: int
    column: int
    """1-based column of the call."""

    kind: LiteralKind
    text: str | None
    """The literal argument, or ``None`` when it was not a string literal."""

    error: str | None
    """Why the call failed, or ``None`` when the literal is valid."""

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Aggregate result of scanning one or more paths."""

    files: tuple[Path, ...]
    findings: tuple[LiteralFinding, ...]

    @property
    def failures(self) -> tuple[LiteralFinding, ...]:
        return tuple(finding for finding in self.findings if not finding.ok)

    @property
    def ok(self) -> bool:
        return not self.failures


# ---------------------------------------------------------------------------
# AST analysis
# ---------------------------------------------------------------------------

def _dotted_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        base = _dotted_name(node.value)
        return f"{base}.{node.attr}" if base is not None else None
    return None


class _ImportTable:
    """Local names bound to literal constructors or their modules."""

    def __init__(self, tree: ast.AST) -> None:
        self.functions: dict[str, LiteralKind] = {}
        self.modules: set[str] = set()
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.module in LITERAL_MODULES:
                for alias in node.names:
                    kind = CONSTRUCTORS.get(alias.name)
                    if kind is not None:
                        self.functions[alias.asname or alias.name] = kind
            elif isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name not in LITERAL_MODULES:
                        continue
                    if alias.asname is not None:
                        self.modules.add(alias.asname)
                        continue
                    # ``import outils.core.literals`` also binds ``outils``.
                    self.modules.add(alias.name)
                    self.modules.add(alias.name.split(".")[0])

    def kind_of(self, func: ast.expr) -> LiteralKind | None:
        if isinstance(func, ast.Name):
            return self.functions.get(func.id)
        if isinstance(func, ast.Attribute) and _dotted_name(func.value) in self.modules:
            return CONSTRUCTORS.get(func.attr)
        return None


def _literal_argument(call: ast.Call) -> str | None:
    if call.keywords or len(call.args) != 1:
        return None
    arg = call.args[0]
    if isinstance(arg, ast.Constant) and isinstance(arg.value, str):
        return arg.value
    return None


def _check_call(call: ast.Call, kind: LiteralKind, path: Path) -> LiteralFinding:
    text = _literal_argument(call)
    error: str | None = None
    if text is None:
        error = NOT_A_LITERAL
    else:
        try:
            parse_literal(kind, text)
        except InvalidLiteralError as exc:
            error = str(exc)
    return LiteralFinding(
        path=path,
        line=call.lineno,
        column=call.col_offset + 1,
        kind=kind,
        text=text,
        error=error,
    )


def scan_source(source: str, path: Path) -> list[LiteralFinding]:
    """Check every literal constructor call in *source*.

    Raises
    ------
    SourceScanError
        When *source* is not valid Python.
    """
    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as exc:
        raise SourceScanError(
            f"Cannot parse {path}: {exc.msg} (line {exc.lineno})",
        ) from exc

    imports = _ImportTable(tree)
    findings: list[LiteralFinding] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Call):
            kind = imports.kind_of(node.func)
            if kind is not None:
                findings.append(_check_call(node, kind, path))
    findings.sort(key=lambda finding: (finding.line, finding.column))
    return findings


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

def iter_python_files(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield ``.py`` files under *paths*, recursing into directories.

    Raises
    ------
    SourceScanError
        When a path does not exist.
    """
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*.py")):
                relative = candidate.relative_to(path).parts[:-1]
                if any(part in _SKIPPED_DIRS or part.startswith(".") for part in relative):
                    continue
                yield candidate
        elif path.is_file():
            yield path
        else:
            raise SourceScanError(
                f"No such file or directory: {path}",
                hint="Pass Python files or directories containing them.",
            )


def scan_file(path: Path) -> list[LiteralFinding]:
    """Read and check one source file."""
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceScanError(f"Cannot read {path}: {exc}") from exc
    return scan_source(source, path)


def scan_paths(paths: Iterable[Path]) -> ScanReport:
    """Check every Python file reachable from *paths*."""
    files: list[Path] = []
    findings: list[LiteralFinding] = []
    for path in iter_python_files(paths):
        files.append(path)
        findings.extend(scan_file(path))
    report = ScanReport(files=tuple(files), findings=tuple(findings))
    logger.debug(
        "Scanned %d file(s): %d literal(s), %d failure(s)",
        len(report.files), len(report.findings), len(report.failures),
    )
    return report
