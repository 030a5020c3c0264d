"""Configuration source tracking for the CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from core_types import JsonValue


class ConfigSource(StrEnum):
    """Source of a configuration value."""

    CONFIG_FILE = "config_file"
    DEFAULT = "default"


@dataclass(frozen=True)
class ConfigValue:
    """Configuration value with source tracking.

    Parameters
    ----------
    key
        Dotted key, e.g. ``scan.max_file_bytes``.
    value
        The resolved value.
    source
        Source of the value.
    location
        File (and table) the value was read from.
    """

    key: str
    value: JsonValue
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


def flatten_config(config: Mapping[str, JsonValue], prefix: str = "") -> dict[str, JsonValue]:
    """Flatten nested tables into dotted keys.

    Returns
    -------
    dict[str, JsonValue]
        Mapping of dotted keys to leaf values.
    """
    flat: dict[str, JsonValue] = {}
    for key, value in config.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten_config(cast("Mapping[str, JsonValue]", value), f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


@dataclass(frozen=True)
class ConfigWithSources:
    """Complete configuration with source tracking.

    Parameters
    ----------
    values
        Mapping of dotted keys to ConfigValue instances.
    """

    values: dict[str, ConfigValue]

    def to_display_dict(self) -> dict[str, dict[str, object]]:
        """Convert to display-ready dictionary representation.

        Returns
        -------
        dict[str, dict[str, object]]
            Dotted keys with their values and sources.
        """
        return {key: cv.to_dict() for key, cv in sorted(self.values.items())}

    def to_flat_dict(self) -> dict[str, JsonValue]:
        """Get plain dotted values without source tracking.

        Returns
        -------
        dict[str, JsonValue]
            Dotted key-value configuration dictionary.
        """
        return {key: cv.value for key, cv in self.values.items()}

    def to_nested_dict(self, *, include_defaults: bool = False) -> dict[str, JsonValue]:
        """Rebuild the table layout from dotted keys.

        Parameters
        ----------
        include_defaults
            Whether values that came from defaults are included.

        Returns
        -------
        dict[str, JsonValue]
            Configuration grouped by table.
        """
        nested: dict[str, JsonValue] = {}
        for key, cv in self.values.items():
            if cv.source is ConfigSource.DEFAULT and not include_defaults:
                continue
            *tables, leaf = key.split(".")
            target = nested
            for table in tables:
                target = cast("dict[str, JsonValue]", target.setdefault(table, {}))
            target[leaf] = cv.value
        return nested


__all__ = ["ConfigSource", "ConfigValue", "ConfigWithSources", "flatten_config"]
