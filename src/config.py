"""Service configuration: file lookup, environment overrides and validation.

Lookup order for the configuration file:

1. an explicit ``--config`` path (``.toml`` or ``.json``; a ``pyproject.toml``
   is read from its ``[tool.comfortable]`` table);
2. ``comfortable.toml`` in the working directory or any parent;
3. ``[tool.comfortable]`` in the nearest ``pyproject.toml``;
4. built-in defaults rooted at ``~/comfortable-data-service``.

``COMFORTABLE_*`` environment variables override individual keys on top of
whichever source was found.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import msgspec

from runtime_models.adapters import SERVICE_CONFIG_ADAPTER
from serde_msgspec import StructBaseStrict, validation_error_payload
from utils.env_utils import env_bool, env_float, env_path
from utils.file_io import read_json, read_toml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "comfortable.toml"
PYPROJECT_TOOL_KEY = "comfortable"
APPLICATION_FOLDER = "comfortable-data-service"
BOOKS_FOLDER = "books"
MOVIES_FOLDER = "movies"
TODOS_FILENAME = "todos.json"


class BooksImportSpec(StructBaseStrict):
    """Run the book import at startup when enabled."""

    enabled: bool = False


class BooksSpec(StructBaseStrict):
    path: str | None = None
    import_: BooksImportSpec = msgspec.field(default_factory=BooksImportSpec, name="import")


class MoviesSpec(StructBaseStrict):
    path: str | None = None


class TodosExportSpec(StructBaseStrict):
    """Scheduled todo export settings (seconds)."""

    enabled: bool = False
    fixed_rate_s: float = 5.0
    initial_delay_s: float = 5.0


class TodosSpec(StructBaseStrict):
    path: str | None = None
    export: TodosExportSpec = msgspec.field(default_factory=TodosExportSpec)


class ServiceConfigSpec(StructBaseStrict):
    """Root configuration document."""

    books: BooksSpec = msgspec.field(default_factory=BooksSpec)
    movies: MoviesSpec = msgspec.field(default_factory=MoviesSpec)
    todos: TodosSpec = msgspec.field(default_factory=TodosSpec)


@dataclass(frozen=True)
class EnvOverride:
    """Environment variable bound to one dotted config key."""

    env_var: str
    key: str
    parse: Callable[[str], Any]


ENV_OVERRIDES: tuple[EnvOverride, ...] = (
    EnvOverride("COMFORTABLE_BOOKS_PATH", "books.path", lambda name: _str_or_none(env_path(name))),
    EnvOverride("COMFORTABLE_MOVIES_PATH", "movies.path", lambda name: _str_or_none(env_path(name))),
    EnvOverride("COMFORTABLE_TODOS_PATH", "todos.path", lambda name: _str_or_none(env_path(name))),
    EnvOverride("COMFORTABLE_BOOKS_IMPORT_ENABLED", "books.import.enabled", env_bool),
    EnvOverride("COMFORTABLE_TODOS_EXPORT_ENABLED", "todos.export.enabled", env_bool),
    EnvOverride("COMFORTABLE_TODOS_EXPORT_FIXED_RATE_S", "todos.export.fixed_rate_s", env_float),
    EnvOverride(
        "COMFORTABLE_TODOS_EXPORT_INITIAL_DELAY_S",
        "todos.export.initial_delay_s",
        env_float,
    ),
)


def _str_or_none(path: Path | None) -> str | None:
    return None if path is None else str(path)


@dataclass(frozen=True)
class ResolvedConfig:
    """Validated configuration plus where each value came from.

    Parameters
    ----------
    spec
        Decoded and validated configuration.
    location
        File (and table) the configuration was read from, if any.
    file_keys
        Dotted keys present in that file.
    env_keys
        Dotted keys overridden from the environment, mapped to the variable.
    """

    spec: ServiceConfigSpec
    location: str | None = None
    file_keys: frozenset[str] = frozenset()
    env_keys: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ServicePaths:
    """Filesystem locations derived from the configuration."""

    books: Path
    movies: Path
    todos: Path

    @classmethod
    def from_spec(cls, spec: ServiceConfigSpec, *, home: Path | None = None) -> ServicePaths:
        """Resolve paths, filling unset ones from the application folder.

        Returns
        -------
        ServicePaths
            Absolute, user-expanded paths.
        """
        root = (home or Path.home()) / APPLICATION_FOLDER

        def _pick(value: str | None, default: Path) -> Path:
            return Path(value).expanduser() if value else default

        return cls(
            books=_pick(spec.books.path, root / BOOKS_FOLDER),
            movies=_pick(spec.movies.path, root / MOVIES_FOLDER),
            todos=_pick(spec.todos.path, root / TODOS_FILENAME),
        )


def ensure_directories(paths: ServicePaths) -> None:
    """Create the books and movies folders and the todo export folder.

    Failures are logged; a missing folder surfaces later as an import or
    export error.
    """
    for directory in (paths.books, paths.movies, paths.todos.parent):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception("Cannot create directory %s", directory)


def load_service_config(config_file: str | Path | None = None) -> ResolvedConfig:
    """Load, override and validate the service configuration.

    Parameters
    ----------
    config_file
        Optional explicit config file path.

    Returns
    -------
    ResolvedConfig
        Validated configuration with source tracking.

    Raises
    ------
    FileNotFoundError
        Raised when an explicit ``config_file`` does not exist.
    ValueError
        Raised when the configuration fails validation.
    """
    if config_file is not None:
        path = Path(config_file)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw, location = _read_explicit(path)
    else:
        raw, location = _read_default()
    file_keys = frozenset(_dotted_keys(raw))
    payload, env_keys = _apply_env_overrides(raw)
    spec = decode_service_config(payload, location=location or "<defaults>")
    if location is not None:
        logger.debug("Loaded configuration from %s", location)
    return ResolvedConfig(spec=spec, location=location, file_keys=file_keys, env_keys=env_keys)


def decode_service_config(raw: Mapping[str, Any], *, location: str) -> ServiceConfigSpec:
    """Decode and validate a raw configuration mapping.

    Returns
    -------
    ServiceConfigSpec
        Decoded configuration.

    Raises
    ------
    ValueError
        Raised when the payload does not match the schema.
    """
    try:
        spec = msgspec.convert(dict(raw), type=ServiceConfigSpec, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ValueError(msg) from exc
    try:
        SERVICE_CONFIG_ADAPTER.validate_python(msgspec.to_builtins(spec))
    except ValueError as exc:
        msg = f"Config validation failed for {location}: {exc}"
        raise ValueError(msg) from exc
    return spec


def flatten_config(spec: msgspec.Struct, prefix: str = "") -> dict[str, Any]:
    """Return every leaf value of ``spec`` keyed by its dotted wire name.

    Returns
    -------
    dict[str, Any]
        Mapping such as ``{"todos.export.enabled": False, ...}``.
    """
    flat: dict[str, Any] = {}
    for info in msgspec.structs.fields(spec):
        key = f"{prefix}{info.encode_name}"
        value = getattr(spec, info.name)
        if isinstance(value, msgspec.Struct):
            flat.update(flatten_config(value, prefix=f"{key}."))
        else:
            flat[key] = value
    return flat


def _read_explicit(path: Path) -> tuple[dict[str, Any], str]:
    if path.suffix == ".json":
        raw = read_json(path)
        if not isinstance(raw, dict):
            msg = f"Config validation failed for {path}: JSON root must be an object."
            raise ValueError(msg)
        return raw, str(path)
    raw = dict(read_toml(path))
    if path.name == "pyproject.toml":
        nested = _extract_tool_config(raw)
        if nested is None:
            msg = f"Config validation failed for {path}: missing [tool.{PYPROJECT_TOOL_KEY}] section."
            raise ValueError(msg)
        return nested, f"{path}:tool.{PYPROJECT_TOOL_KEY}"
    return raw, str(path)


def _read_default() -> tuple[dict[str, Any], str | None]:
    config_path = _find_in_parents(CONFIG_FILENAME)
    if config_path is not None:
        return dict(read_toml(config_path)), str(config_path)
    pyproject_path = _find_in_parents("pyproject.toml")
    if pyproject_path is not None:
        nested = _extract_tool_config(dict(read_toml(pyproject_path)))
        if nested is not None:
            return nested, f"{pyproject_path}:tool.{PYPROJECT_TOOL_KEY}"
    return {}, None


def _find_in_parents(filename: str) -> Path | None:
    path = Path.cwd()
    while True:
        candidate = path / filename
        if candidate.exists():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _extract_tool_config(raw: Mapping[str, Any]) -> dict[str, Any] | None:
    tool_section = raw.get("tool")
    if not isinstance(tool_section, dict):
        return None
    nested = tool_section.get(PYPROJECT_TOOL_KEY)
    if not isinstance(nested, dict):
        return None
    return nested


def _dotted_keys(raw: Mapping[str, Any], prefix: str = "") -> list[str]:
    keys: list[str] = []
    for key, value in raw.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            keys.extend(_dotted_keys(value, prefix=f"{dotted}."))
        else:
            keys.append(dotted)
    return keys


def _apply_env_overrides(raw: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, str]]:
    payload = _deep_copy(raw)
    applied: dict[str, str] = {}
    for override in ENV_OVERRIDES:
        value = override.parse(override.env_var)
        if value is None:
            continue
        *parents, leaf = override.key.split(".")
        section = payload
        for name in parents:
            child = section.get(name)
            if not isinstance(child, dict):
                child = {}
                section[name] = child
            section = child
        section[leaf] = value
        applied[override.key] = override.env_var
    return payload, applied


def _deep_copy(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: _deep_copy(value) if isinstance(value, Mapping) else value
        for key, value in raw.items()
    }


__all__ = [
    "ENV_OVERRIDES",
    "BooksImportSpec",
    "BooksSpec",
    "MoviesSpec",
    "ResolvedConfig",
    "ServiceConfigSpec",
    "ServicePaths",
    "TodosExportSpec",
    "TodosSpec",
    "decode_service_config",
    "ensure_directories",
    "flatten_config",
    "load_service_config",
]
