"""Tests for environment parsing and atomic file writes."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from utils.env_utils import env_bool, env_float, env_path, env_value
from utils.file_io import read_json, read_toml, write_atomic

FLOAT_VALUE = 2.5


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("YES", True), ("on", True), ("0", False), ("off", False), ("  ", None)],
)
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool | None) -> None:
    """Common boolean spellings are recognised; blank means unset."""
    monkeypatch.setenv("TEST_FLAG", raw)
    assert env_bool("TEST_FLAG") is expected


def test_env_bool_invalid_falls_back(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Unrecognised values log a warning and use the default."""
    monkeypatch.setenv("TEST_FLAG", "maybe")
    assert env_bool("TEST_FLAG", default=True) is True
    assert "Invalid boolean" in caplog.text


def test_env_float_and_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Floats parse; missing variables return the default."""
    monkeypatch.setenv("TEST_RATE", " 2.5 ")
    monkeypatch.delenv("TEST_MISSING", raising=False)
    assert env_float("TEST_RATE") == FLOAT_VALUE
    assert env_float("TEST_MISSING", default=1.0) == 1.0
    assert env_value("TEST_MISSING") is None
    monkeypatch.setenv("TEST_RATE", "fast")
    assert env_float("TEST_RATE") is None


def test_env_path_expands_user(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """A leading tilde expands to the home directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("TEST_DIR", "~/books")
    assert env_path("TEST_DIR") == tmp_path / "books"


def test_write_atomic_replaces_content(tmp_path: Path) -> None:
    """The target is fully replaced and no temporary file remains."""
    target = tmp_path / "out.json"
    target.write_bytes(b"0123456789")
    write_atomic(target, b"[]")
    assert target.read_bytes() == b"[]"
    assert read_json(target) == []
    assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


@pytest.mark.parametrize(("umask", "expected"), [(0o022, 0o644), (0o027, 0o640)])
def test_write_atomic_honours_umask(tmp_path: Path, umask: int, expected: int) -> None:
    """The written file gets the same mode a plain write would."""
    target = tmp_path / "out.json"
    previous = os.umask(umask)
    try:
        write_atomic(target, b"[]")
    finally:
        os.umask(previous)
    assert stat.S_IMODE(target.stat().st_mode) == expected


def test_write_atomic_missing_directory(tmp_path: Path) -> None:
    """Writing into a missing directory raises OSError."""
    with pytest.raises(OSError):
        write_atomic(tmp_path / "absent" / "out.json", b"[]")


def test_write_atomic_cleans_up_on_failure(tmp_path: Path) -> None:
    """A failed rename leaves neither target nor temporary file."""
    target = tmp_path / "dir-target"
    target.mkdir()
    (target / "keep").write_text("x", encoding="utf-8")
    with pytest.raises(OSError):
        write_atomic(target, b"[]")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["dir-target"]


def test_read_toml(tmp_path: Path) -> None:
    """TOML documents decode to mappings."""
    path = tmp_path / "c.toml"
    path.write_text("[a]\nb = 1\n", encoding="utf-8")
    assert read_toml(path) == {"a": {"b": 1}}
