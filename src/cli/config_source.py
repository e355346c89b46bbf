"""Configuration source tracking for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from config import ResolvedConfig, flatten_config


class ConfigSource(StrEnum):
    """Source of a configuration value."""

    ENV = "env"
    CONFIG_FILE = "config_file"
    DEFAULT = "default"


@dataclass(frozen=True)
class ConfigValue:
    """Configuration value with source tracking.

    Parameters
    ----------
    key
        Dotted configuration key, e.g. ``todos.export.enabled``.
    value
        The resolved value.
    source
        Source of the value.
    location
        Env var name or file path, when the source has one.
    """

    key: str
    value: Any
    source: ConfigSource
    location: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary representation.

        Returns
        -------
        dict[str, object]
            Dictionary with value, source, and optional location.
        """
        result: dict[str, object] = {
            "value": self.value,
            "source": self.source.value,
        }
        if self.location:
            result["location"] = self.location
        return result


@dataclass(frozen=True)
class ConfigWithSources:
    """Complete configuration with source tracking."""

    values: dict[str, ConfigValue]

    @classmethod
    def from_resolved(cls, resolved: ResolvedConfig) -> ConfigWithSources:
        """Attribute every leaf of ``resolved.spec`` to its source.

        Environment overrides win over the file, the file over defaults.

        Returns
        -------
        ConfigWithSources
            Source-tracked configuration.
        """
        values: dict[str, ConfigValue] = {}
        for key, value in flatten_config(resolved.spec).items():
            env_var = resolved.env_keys.get(key)
            if env_var is not None:
                values[key] = ConfigValue(key, value, ConfigSource.ENV, env_var)
            elif key in resolved.file_keys:
                values[key] = ConfigValue(key, value, ConfigSource.CONFIG_FILE, resolved.location)
            else:
                values[key] = ConfigValue(key, value, ConfigSource.DEFAULT)
        return cls(values=values)

    def to_display_dict(self) -> dict[str, dict[str, object]]:
        """Return values and their sources keyed by dotted name.

        Returns
        -------
        dict[str, dict[str, object]]
            Nested dictionary with values and their sources.
        """
        return {key: cv.to_dict() for key, cv in self.values.items()}

    def to_flat_dict(self) -> dict[str, Any]:
        """Get plain configuration values without source tracking.

        Returns
        -------
        dict[str, Any]
            Plain key-value configuration dictionary.
        """
        return {key: cv.value for key, cv in self.values.items()}


__all__ = ["ConfigSource", "ConfigValue", "ConfigWithSources"]
