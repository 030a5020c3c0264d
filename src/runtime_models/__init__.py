"""Runtime validation models for config boundaries."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from runtime_models.adapters import ROOT_CONFIG_ADAPTER
    from runtime_models.base import RuntimeBase
    from runtime_models.root import (
        BackupConfigRuntime,
        RemovalConfigRuntime,
        RootConfigRuntime,
        ScanConfigRuntime,
    )

__all__ = [
    "ROOT_CONFIG_ADAPTER",
    "BackupConfigRuntime",
    "RemovalConfigRuntime",
    "RootConfigRuntime",
    "RuntimeBase",
    "ScanConfigRuntime",
]

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "ROOT_CONFIG_ADAPTER": ("runtime_models.adapters", "ROOT_CONFIG_ADAPTER"),
    "BackupConfigRuntime": ("runtime_models.root", "BackupConfigRuntime"),
    "RemovalConfigRuntime": ("runtime_models.root", "RemovalConfigRuntime"),
    "RootConfigRuntime": ("runtime_models.root", "RootConfigRuntime"),
    "RuntimeBase": ("runtime_models.base", "RuntimeBase"),
    "ScanConfigRuntime": ("runtime_models.root", "ScanConfigRuntime"),
}


def __getattr__(name: str) -> object:
    export = _EXPORT_MAP.get(name)
    if export is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_name, attr_name = export
    module = importlib.import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
