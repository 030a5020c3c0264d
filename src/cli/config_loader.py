"""Config loading and normalization helpers for the CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import cast

import msgspec
from pydantic import ValidationError as PydanticValidationError

from cli.config_models import RootConfig
from cli.config_source import ConfigSource, ConfigValue, ConfigWithSources, flatten_config
from core_types import JsonValue
from runtime_models.adapters import ROOT_CONFIG_ADAPTER
from serde_msgspec import validation_error_payload
from utils.file_io import read_toml
from workspace.options import PipelineOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "nologs.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_TABLE = "nologs"
DEFAULT_LOG_LEVEL = "INFO"


def default_config_contents() -> dict[str, JsonValue]:
    """Return the built-in configuration in table layout.

    Returns
    -------
    dict[str, JsonValue]
        Default values for every configuration key.
    """
    options = PipelineOptions()
    discovery = options.discovery
    return {
        "scan": {
            "receiver": options.receiver,
            "methods": list(options.methods),
            "include_globs": list(discovery.include_globs),
            "exclude_globs": list(discovery.exclude_globs),
            "exclude_dirs": list(discovery.exclude_dirs),
            "respect_gitignore": discovery.respect_gitignore,
            "follow_symlinks": discovery.follow_symlinks,
            "max_file_bytes": options.max_file_bytes,
        },
        "removal": {
            "lookbehind_chars": options.lookbehind_chars,
            "lookahead_chars": options.lookahead_chars,
            "skip_risky": options.skip_risky,
        },
        "backup": {
            "enabled": options.backup.enabled,
            "directory": options.backup.directory,
        },
        "log_level": DEFAULT_LOG_LEVEL,
    }


def load_effective_config(config_file: str | None) -> dict[str, JsonValue]:
    """Load config contents from nologs.toml / pyproject.toml or explicit --config.

    Parameters
    ----------
    config_file
        Optional explicit config file path.

    Returns
    -------
    dict[str, JsonValue]
        Configured values grouped by table; defaults are not filled in.
    """
    return load_effective_config_with_sources(config_file).to_nested_dict()


def load_effective_config_with_sources(config_file: str | None) -> ConfigWithSources:
    """Load config contents with source tracking.

    Values from ``nologs.toml`` take precedence over ``[tool.nologs]`` in
    ``pyproject.toml``; keys set in neither report their default.

    Parameters
    ----------
    config_file
        Optional explicit config file path.

    Returns
    -------
    ConfigWithSources
        Configuration with source tracking for each value.
    """
    values: dict[str, ConfigValue] = {}
    if config_file:
        _load_explicit_config(values, Path(config_file))
    else:
        _load_default_configs(values)
    for key, value in flatten_config(default_config_contents()).items():
        if key not in values:
            values[key] = ConfigValue(key=key, value=value, source=ConfigSource.DEFAULT)
    return ConfigWithSources(values=values)


def find_in_parents(filename: str, start: Path | None = None) -> Path | None:
    """Walk parents from ``start`` (default: cwd) to find a filename.

    Returns
    -------
    Path | None
        Path to the first matching file in the directory or its parents.
    """
    path = (start or Path.cwd()).resolve()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _load_explicit_config(values: dict[str, ConfigValue], path: Path) -> None:
    if not path.is_file():
        msg = f"Config file not found: {path}."
        raise FileNotFoundError(msg)
    raw, location = _resolve_explicit_payload(path)
    root = _decode_root_config(raw, location=location)
    _apply_config_values(values, root, location=location, skip_existing=False)


def _load_default_configs(values: dict[str, ConfigValue]) -> None:
    nologs_path = find_in_parents(CONFIG_FILENAME)
    if nologs_path is not None:
        raw = _read_toml(nologs_path)
        root = _decode_root_config(raw, location=str(nologs_path))
        _apply_config_values(values, root, location=str(nologs_path), skip_existing=False)

    pyproject_path = find_in_parents(PYPROJECT_FILENAME)
    if pyproject_path is None:
        return
    nested = _extract_tool_config(_read_toml(pyproject_path))
    if nested is None:
        return
    location = f"{pyproject_path}:tool.{TOOL_TABLE}"
    root = _decode_root_config(nested, location=location)
    _apply_config_values(values, root, location=location, skip_existing=True)


def _read_toml(path: Path) -> dict[str, JsonValue]:
    try:
        payload = read_toml(path)
    except msgspec.DecodeError as exc:
        msg = f"Config file {path} is not valid TOML: {exc}"
        raise ValueError(msg) from exc
    return cast("dict[str, JsonValue]", dict(payload))


def _apply_config_values(
    values: dict[str, ConfigValue],
    config: RootConfig,
    *,
    location: str,
    skip_existing: bool,
) -> None:
    for key, value in flatten_config(_config_to_mapping(config)).items():
        if skip_existing and key in values:
            continue
        values[key] = ConfigValue(
            key=key,
            value=value,
            source=ConfigSource.CONFIG_FILE,
            location=location,
        )


def _decode_root_config(raw: Mapping[str, JsonValue], *, location: str) -> RootConfig:
    try:
        config = msgspec.convert(dict(raw), type=RootConfig, strict=True)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise ValueError(msg) from exc
    _validate_root_runtime(config, location=location)
    logger.debug("Loaded configuration from %s.", location)
    return config


def _config_to_mapping(config: RootConfig) -> dict[str, JsonValue]:
    payload = msgspec.to_builtins(config, str_keys=True)
    return cast("dict[str, JsonValue]", payload)


def _validate_root_runtime(config: RootConfig, *, location: str) -> None:
    try:
        ROOT_CONFIG_ADAPTER.validate_python(_config_to_mapping(config))
    except PydanticValidationError as exc:
        msg = f"Config validation failed for {location}: {exc}"
        raise ValueError(msg) from exc


def _resolve_explicit_payload(path: Path) -> tuple[Mapping[str, JsonValue], str]:
    raw = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        nested = _extract_tool_config(raw)
        if nested is None:
            msg = f"Config validation failed for {path}: missing [tool.{TOOL_TABLE}] section."
            raise ValueError(msg)
        return nested, f"{path}:tool.{TOOL_TABLE}"
    return raw, str(path)


def _extract_tool_config(raw: Mapping[str, JsonValue]) -> dict[str, JsonValue] | None:
    tool_section = raw.get("tool")
    if not isinstance(tool_section, dict):
        return None
    nested = tool_section.get(TOOL_TABLE)
    if not isinstance(nested, dict):
        return None
    return cast("dict[str, JsonValue]", nested)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_LOG_LEVEL",
    "default_config_contents",
    "find_in_parents",
    "load_effective_config",
    "load_effective_config_with_sources",
]
