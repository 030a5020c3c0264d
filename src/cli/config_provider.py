"""Shared configuration resolution for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cli.config_loader import load_effective_config_with_sources
from cli.validation import validate_config_consistency

if TYPE_CHECKING:
    from cli.config_source import ConfigWithSources
    from core_types import JsonValue


@dataclass(frozen=True)
class ConfigResolution:
    """Resolved configuration payload plus source tracking."""

    contents: dict[str, JsonValue]
    sources: ConfigWithSources


def resolve_config(config_file: str | None) -> ConfigResolution:
    """Resolve and validate config contents and source metadata from disk.

    Returns
    -------
    ConfigResolution
        Configured values (without defaults) and per-key sources.
    """
    sources = load_effective_config_with_sources(config_file)
    contents = sources.to_nested_dict()
    validate_config_consistency(contents)
    return ConfigResolution(contents=contents, sources=sources)


__all__ = ["ConfigResolution", "resolve_config"]
