"""Pydantic base model for validating configuration at runtime."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RuntimeBase(BaseModel):
    """Base class for runtime validation models.

    Unknown keys are rejected and validated instances are immutable.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        frozen=True,
        revalidate_instances="always",
    )


__all__ = ["RuntimeBase"]
