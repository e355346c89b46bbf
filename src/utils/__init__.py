"""Shared utilities for comfortable-data."""

from utils.env_utils import env_bool, env_float, env_path, env_value
from utils.file_io import read_json, read_text, read_toml, write_atomic
from utils.registry_protocol import ImmutableRegistry, MutableRegistry, Registry

__all__ = [
    "ImmutableRegistry",
    "MutableRegistry",
    "Registry",
    "env_bool",
    "env_float",
    "env_path",
    "env_value",
    "read_json",
    "read_text",
    "read_toml",
    "write_atomic",
]
