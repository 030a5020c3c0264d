"""Centralized TypeAdapter instances for runtime validation."""

from __future__ import annotations

from pydantic import TypeAdapter

from runtime_models.root import RootConfigRuntime

ROOT_CONFIG_ADAPTER = TypeAdapter(RootConfigRuntime)

__all__ = ["ROOT_CONFIG_ADAPTER"]
