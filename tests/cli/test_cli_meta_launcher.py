"""Tests for the meta launcher and result handling."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.app import meta_launcher
from cli.exit_codes import ExitCode
from cli.result import CliResult
from cli.result_action import cli_result_action
from content.errors import ConfigurationError, DecodeError, UnsupportedFormatError
from tests.test_helpers.samples import BOOK_YAML


def test_meta_launcher_loads_config_from_cwd(
    tmp_path: Path,
    clean_env: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """The launcher resolves configuration before dispatching."""
    (tmp_path / "comfortable.toml").write_text(
        "[todos.export]\nfixed_rate_s = 1.5\n",
        encoding="utf-8",
    )
    clean_env.chdir(tmp_path)
    exit_code = meta_launcher("config", "show")
    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["todos.export.fixed_rate_s"] == 1.5


def test_meta_launcher_injects_run_context(
    tmp_path: Path,
    clean_env: pytest.MonkeyPatch,
) -> None:
    """Commands needing the run context get the configured paths."""
    books = tmp_path / "books"
    books.mkdir()
    (books / "book.yaml").write_text(BOOK_YAML, encoding="utf-8")
    clean_env.chdir(tmp_path)
    clean_env.setenv("COMFORTABLE_BOOKS_PATH", str(books))
    assert meta_launcher("import-books") == ExitCode.SUCCESS


def test_meta_launcher_reports_bad_config(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    """Invalid configuration stops before any command runs."""
    (tmp_path / "comfortable.toml").write_text("[unknown]\n", encoding="utf-8")
    clean_env.chdir(tmp_path)
    assert meta_launcher("formats") == ExitCode.CONFIG_ERROR


def test_meta_launcher_convert(
    tmp_path: Path,
    clean_env: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Conversion runs end to end through argument parsing."""
    source = tmp_path / "book.yaml"
    source.write_text(BOOK_YAML, encoding="utf-8")
    clean_env.chdir(tmp_path)
    assert meta_launcher("convert", str(source), "--to", "xml") == ExitCode.SUCCESS
    assert "<isbn>3-518-38959-9</isbn>" in capsys.readouterr().out


def test_result_action_normalizes_returns() -> None:
    """None, ints and CliResults all become exit codes."""
    assert cli_result_action(None, None, None) == ExitCode.SUCCESS  # type: ignore[arg-type]
    assert cli_result_action(None, None, 3) == 3  # type: ignore[arg-type]
    failed = CliResult(exit_code=ExitCode.IO_ERROR, summary="boom")
    assert cli_result_action(None, None, failed) == ExitCode.IO_ERROR  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (DecodeError("bad"), ExitCode.DECODE_ERROR),
        (UnsupportedFormatError("x"), ExitCode.UNSUPPORTED_FORMAT),
        (ConfigurationError("x"), ExitCode.CONFIG_ERROR),
        (FileNotFoundError("x"), ExitCode.IO_ERROR),
        (PermissionError("x"), ExitCode.IO_ERROR),
        (ValueError("x"), ExitCode.VALIDATION_ERROR),
        (RuntimeError("x"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_from_exception(exc: BaseException, expected: ExitCode) -> None:
    """Exceptions map to the documented exit codes."""
    assert ExitCode.from_exception(exc) is expected
