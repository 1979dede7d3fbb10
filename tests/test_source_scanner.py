"""Tests for the static literal checker (infra/source_scanner.py).

Sources are passed as strings or written under ``tmp_path``; nothing
scanned here is ever imported.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from outils.core.literals import LiteralKind
from outils.exceptions import SourceScanError
from outils.infra.source_scanner import (
    NOT_A_LITERAL,
    iter_python_files,
    scan_paths,
    scan_source,
)

_PATH = Path("pkg/constants.py")


def _scan(source: str):
    return scan_source(textwrap.dedent(source), _PATH)


# ---------------------------------------------------------------------------
# Call resolution
# ---------------------------------------------------------------------------

class TestCallResolution:
    def test_from_import(self) -> None:
        findings = _scan(
            """
            from outils import link
            HOME = link("https://example.com")
            """
        )
        assert len(findings) == 1
        assert findings[0].kind is LiteralKind.LINK
        assert findings[0].text == "https://example.com"
        assert findings[0].ok

    def test_aliased_import_from_core_module(self) -> None:
        findings = _scan(
            """
            from outils.core.literals import date as d
            LAUNCH = d("08-22-1995")
            """
        )
        assert [f.kind for f in findings] == [LiteralKind.DATE]

    def test_module_attribute(self) -> None:
        findings = _scan(
            """
            import outils
            import outils.core.literals as lit
            A = outils.url("https://example.com")
            B = lit.mail_to("bad address")
            """
        )
        assert [f.kind for f in findings] == [LiteralKind.URL, LiteralKind.MAIL_TO]
        assert findings[0].ok
        assert not findings[1].ok

    def test_dotted_import_binds_package_root(self) -> None:
        findings = _scan(
            """
            import outils.core.literals
            A = outils.url("a b")
            B = outils.core.literals.link("https://example.com")
            """
        )
        assert [f.kind for f in findings] == [LiteralKind.URL, LiteralKind.LINK]
        assert not findings[0].ok
        assert findings[1].ok

    def test_aliased_dotted_import_does_not_bind_root(self) -> None:
        findings = _scan(
            """
            import outils.core.literals as lit
            A = outils.url("a b")
            """
        )
        assert findings == []

    def test_unrelated_functions_ignored(self) -> None:
        findings = _scan(
            """
            from somewhere import url
            import datetime
            A = url("not checked at all")
            B = datetime.date(2020, 1, 1)
            C = date("soon")
            """
        )
        assert findings == []

    def test_imports_inside_functions_are_seen(self) -> None:
        findings = _scan(
            """
            def build():
                from outils import link
                return link("ftp://x.org")
            """
        )
        assert len(findings) == 1
        assert not findings[0].ok


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------

class TestFindings:
    def test_invalid_literal_reason_and_location(self) -> None:
        findings = _scan(
            """
            from outils import link

            HOME = link("ftp://x.org")
            """
        )
        finding = findings[0]
        assert finding.line == 4
        assert finding.column == 8
        assert finding.location == "pkg/constants.py:4:8"
        assert finding.error is not None
        assert "scheme must be http or https" in finding.error

    @pytest.mark.parametrize(
        "call",
        ['link(name)', 'link(f"https://{host}")', 'link("a", "b")', 'link(text="https://x.org")', "link()", "link(1)"],
    )
    def test_non_literal_arguments(self, call: str) -> None:
        findings = _scan(f"from outils import link\nX = {call}\n")
        assert findings[0].error == NOT_A_LITERAL
        assert findings[0].text is None

    def test_sorted_by_position(self) -> None:
        findings = _scan(
            """
            from outils import date, url
            PAIR = (url("b"), date("1995-08-22"))
            FIRST = url("a")
            """
        )
        assert [(f.line, f.text) for f in findings] == [
            (3, "b"),
            (3, "1995-08-22"),
            (4, "a"),
        ]

    def test_syntax_error(self) -> None:
        with pytest.raises(SourceScanError, match="Cannot parse"):
            scan_source("def broken(:\n", _PATH)


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

class TestScanPaths:
    def _tree(self, root: Path) -> None:
        (root / "pkg").mkdir()
        (root / "pkg" / "good.py").write_text(
            'from outils import link\nHOME = link("https://example.com")\n',
            encoding="utf-8",
        )
        (root / "pkg" / "bad.py").write_text(
            'from outils import date\nLAUNCH = date("someday")\n',
            encoding="utf-8",
        )
        (root / "pkg" / "notes.txt").write_text('link("ftp://x")', encoding="utf-8")
        for skipped in ("__pycache__", ".venv", "build"):
            (root / skipped).mkdir()
            (root / skipped / "junk.py").write_text(
                'from outils import url\nX = url("")\n',
                encoding="utf-8",
            )

    def test_directory_scan_skips_tool_dirs(self, tmp_path: Path) -> None:
        self._tree(tmp_path)
        report = scan_paths([tmp_path])
        assert [p.name for p in report.files] == ["bad.py", "good.py"]
        assert len(report.findings) == 2
        assert not report.ok
        assert [f.path.name for f in report.failures] == ["bad.py"]

    def test_single_file(self, tmp_path: Path) -> None:
        self._tree(tmp_path)
        report = scan_paths([tmp_path / "pkg" / "good.py"])
        assert report.ok
        assert len(report.files) == 1

    def test_root_inside_hidden_directory_is_scanned(self, tmp_path: Path) -> None:
        hidden = tmp_path / ".config"
        hidden.mkdir()
        (hidden / "mod.py").write_text("x = 1\n", encoding="utf-8")
        assert [p.name for p in iter_python_files([hidden])] == ["mod.py"]

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(SourceScanError) as exc_info:
            scan_paths([tmp_path / "absent"])
        assert exc_info.value.hint is not None

    def test_unreadable_file(self, tmp_path: Path) -> None:
        target = tmp_path / "latin.py"
        target.write_bytes(b"x = '\xff'\n")
        with pytest.raises(SourceScanError, match="Cannot read"):
            scan_paths([target])

    def test_empty_directory(self, tmp_path: Path) -> None:
        report = scan_paths([tmp_path])
        assert report.files == ()
        assert report.ok
