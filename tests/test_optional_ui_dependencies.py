"""Regression tests for running the CLI without Rich installed.

Bootstrap commands must keep working and every command must fall back
to plain text on stderr.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from outils.cli import exit_codes
from outils.cli.app import main
from outils.cli.console import escape, get_rich_console, rich_available
from outils.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_console_helpers_degrade(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert rich_available() is False
    assert escape("[bold]x[/bold]") == "[bold]x[/bold]"
    with pytest.raises(EnvironmentError, match="rich is not installed"):
        get_rich_console()


def test_check_reports_in_plain_text(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    (tmp_path / "constants.py").write_text(
        'from outils import link\nHOME = link("ftp://x.org")\n',
        encoding="utf-8",
    )

    assert main(["check", str(tmp_path)]) == exit_codes.GENERAL_ERROR
    err = capsys.readouterr().err
    assert "constants.py:2:8: link 'ftp://x.org'" in err
    assert "1 literal(s) in 1 file(s), 1 invalid" in err


def test_env_reports_in_plain_text(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setenv("PLAINTEST_FLAG", "true")

    assert main(["env", "PLAINTEST_FLAG", "--as", "bool"]) == exit_codes.SUCCESS
    assert "PLAINTEST_FLAG=true -> True" in capsys.readouterr().err
