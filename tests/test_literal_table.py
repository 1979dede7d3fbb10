"""Tests for literal tables and constant-module generation (infra/literal_table.py)."""

from __future__ import annotations

import datetime
import textwrap
from pathlib import Path

import pytest

from outils.core.literals import URL, LiteralKind, LiteralSpec, validate_literals
from outils.exceptions import LiteralCheckError, SourceScanError
from outils.infra.literal_table import generate_module, load_table, render_module

_TABLE = """\
[link]
HOMEPAGE = "https://example.com"

[mail_to]
SUPPORT = "help@example.com"

[date]
LAUNCH = "08-22-1995"
"""


def _write(tmp_path: Path, text: str, name: str = "literals.toml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def _exec(path: Path) -> dict[str, object]:
    namespace: dict[str, object] = {}
    exec(compile(path.read_text(encoding="utf-8"), str(path), "exec"), namespace)
    return namespace


# ---------------------------------------------------------------------------
# load_table
# ---------------------------------------------------------------------------

class TestLoadTable:
    def test_reads_specs_in_table_order(self, tmp_path: Path) -> None:
        specs = load_table(_write(tmp_path, _TABLE))
        assert specs == [
            LiteralSpec("HOMEPAGE", LiteralKind.LINK, "https://example.com"),
            LiteralSpec("SUPPORT", LiteralKind.MAIL_TO, "help@example.com"),
            LiteralSpec("LAUNCH", LiteralKind.DATE, "08-22-1995"),
        ]

    def test_does_not_validate_literals(self, tmp_path: Path) -> None:
        specs = load_table(_write(tmp_path, '[link]\nBAD = "ftp://x.org"\n'))
        assert specs[0].text == "ftp://x.org"

    def test_empty_table(self, tmp_path: Path) -> None:
        assert load_table(_write(tmp_path, "")) == []

    @pytest.mark.parametrize(
        ("text", "match"),
        [
            ('[phone]\nDESK = "555"\n', "Unknown section"),
            ('link = "https://example.com"\n', "must be a table"),
            ('[url]\n"not-an-id" = "a"\n', "not a valid Python identifier"),
            ("[date]\nLAUNCH = 1995-08-22\n", "must be a string"),
            ('[url]\nX = "a"\n[link]\nX = "https://b.org"\n', "more than once"),
            ("[url\n", "Invalid TOML"),
        ],
    )
    def test_structural_errors(self, tmp_path: Path, text: str, match: str) -> None:
        with pytest.raises(SourceScanError, match=match):
            load_table(_write(tmp_path, text))

    @pytest.mark.parametrize(
        "text",
        [
            '[url]\nurl = "https://a.example"\nzeta = "https://b.example"\n',
            '[link]\nURL = "https://a.example"\n',
            '[mail_to]\nmail_to = "a@example.com"\n',
            '[date]\ndatetime = "08-22-1995"\n',
            '[date]\nclass = "08-22-1995"\n',
            '[url]\nNone = "https://a.example"\n',
            '[url]\n__all__ = "https://a.example"\n',
        ],
    )
    def test_names_that_would_break_the_module(self, tmp_path: Path, text: str) -> None:
        with pytest.raises(SourceScanError, match="reserved in the generated module") as exc_info:
            load_table(_write(tmp_path, text))
        assert exc_info.value.hint is not None
        assert "keywords" in exc_info.value.hint

    def test_reserved_name_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "constants.py"
        table = _write(tmp_path, '[date]\nclass = "08-22-1995"\n')
        with pytest.raises(SourceScanError):
            generate_module(table, output)
        assert not output.exists()

    def test_unknown_section_hint_lists_kinds(self, tmp_path: Path) -> None:
        with pytest.raises(SourceScanError) as exc_info:
            load_table(_write(tmp_path, '[phone]\nDESK = "555"\n'))
        assert exc_info.value.hint == "Valid sections: url, link, mail_to, date"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceScanError, match="Cannot read"):
            load_table(tmp_path / "absent.toml")


# ---------------------------------------------------------------------------
# render_module
# ---------------------------------------------------------------------------

class TestRenderModule:
    def test_header_and_sorted_constants(self) -> None:
        specs = [
            LiteralSpec("ZULU", LiteralKind.URL, "https://z.example"),
            LiteralSpec("ALPHA", LiteralKind.LINK, "https://a.example"),
        ]
        text = render_module(specs, validate_literals(specs), source_name="t.toml")
        assert text.startswith("# Generated by outils ")
        assert "from t.toml. Do not edit." in text
        assert "from outils import URL, link, url" in text
        assert text.index("ALPHA: URL") < text.index("ZULU: URL")
        assert '__all__ = ["ALPHA", "ZULU"]' in text
        assert "import datetime" not in text

    def test_dates_only_do_not_import_outils(self) -> None:
        specs = [LiteralSpec("LAUNCH", LiteralKind.DATE, "August 22, 1995")]
        text = render_module(specs, validate_literals(specs))
        assert "import datetime" in text
        assert "from outils" not in text
        assert "LAUNCH: datetime.date = datetime.date(1995, 8, 22)" in text

    def test_mail_to_keeps_original_text(self) -> None:
        specs = [LiteralSpec("SUPPORT", LiteralKind.MAIL_TO, "help@example.com")]
        text = render_module(specs, validate_literals(specs))
        assert "SUPPORT: URL = mail_to('help@example.com')" in text


# ---------------------------------------------------------------------------
# generate_module
# ---------------------------------------------------------------------------

class TestGenerateModule:
    def test_writes_importable_module(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "constants.py"
        specs = generate_module(_write(tmp_path, _TABLE), output)
        assert len(specs) == 3

        namespace = _exec(output)
        assert isinstance(namespace["HOMEPAGE"], URL)
        assert str(namespace["HOMEPAGE"]) == "https://example.com"
        assert str(namespace["SUPPORT"]) == "mailto:help@example.com"
        assert namespace["LAUNCH"] == datetime.date(1995, 8, 22)
        assert namespace["__all__"] == ["HOMEPAGE", "LAUNCH", "SUPPORT"]

    def test_invalid_literal_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "constants.py"
        table = _write(tmp_path, '[link]\nOK = "https://a.org"\nBAD = "ftp://x.org"\n[date]\nWHEN = "soon"\n')
        with pytest.raises(LiteralCheckError) as exc_info:
            generate_module(table, output)
        assert len(exc_info.value.failures) == 2
        assert not output.exists()
        assert list(tmp_path.iterdir()) == [table]

    def test_invalid_literal_keeps_existing_output(self, tmp_path: Path) -> None:
        output = tmp_path / "constants.py"
        output.write_text("PREVIOUS = 1\n", encoding="utf-8")
        table = _write(tmp_path, '[url]\nBAD = "a b"\n')
        with pytest.raises(LiteralCheckError):
            generate_module(table, output)
        assert output.read_text(encoding="utf-8") == "PREVIOUS = 1\n"

    def test_overwrites_previous_output(self, tmp_path: Path) -> None:
        output = tmp_path / "constants.py"
        output.write_text("PREVIOUS = 1\n", encoding="utf-8")
        generate_module(_write(tmp_path, '[url]\nDOCS = "https://docs.example"\n'), output)
        assert "DOCS: URL = url('https://docs.example')" in output.read_text(encoding="utf-8")
