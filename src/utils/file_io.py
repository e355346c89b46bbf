"""File I/O utilities with consistent encoding handling."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import msgspec


def read_text(path: Path, *, encoding: str = "utf-8") -> str:
    """Read text file with consistent encoding.

    Returns
    -------
    str
        File contents.
    """
    return path.read_text(encoding=encoding)


def read_toml(path: Path) -> Mapping[str, object]:
    """Read and parse a TOML file.

    Returns
    -------
    Mapping[str, object]
        Parsed TOML content.

    Raises
    ------
    TypeError
        Raised when the TOML content is not a mapping.
    """
    payload = msgspec.toml.decode(path.read_text(encoding="utf-8"), type=object, strict=True)
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


def read_json(path: Path) -> Any:
    """Read and parse a JSON file.

    Returns
    -------
    Any
        Parsed JSON content.
    """
    return msgspec.json.decode(path.read_bytes())


def _default_file_mode() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


def write_atomic(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` so readers never see a partial file.

    The payload goes to a temporary file in the same directory, is flushed to
    disk and then renamed over ``path``. The temporary file is removed when
    any step fails. The file gets the umask-derived mode a plain ``open``
    would give it.

    Raises
    ------
    OSError
        Raised when the directory is not writable or the rename fails.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            os.fchmod(handle.fileno(), _default_file_mode())
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        Path(tmp_name).replace(path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["read_json", "read_text", "read_toml", "write_atomic"]
