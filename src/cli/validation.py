"""Cross-field validation for CLI configuration payloads."""

from __future__ import annotations

from collections.abc import Mapping

from core_types import JsonValue


def validate_config_consistency(config: Mapping[str, JsonValue]) -> None:
    """Reject combinations of settings that cannot work together.

    Args:
        config: Configured values grouped by table.

    Raises:
        ValueError: If the receiver is also listed as a method, or the
            include globs are explicitly empty.
    """
    scan = config.get("scan") or {}
    if not isinstance(scan, Mapping):
        return
    receiver = scan.get("receiver")
    methods = scan.get("methods")
    if isinstance(receiver, str) and isinstance(methods, list | tuple) and receiver in methods:
        msg = f"Config error: scan.receiver {receiver!r} cannot also be listed in scan.methods."
        raise ValueError(msg)
    include_globs = scan.get("include_globs")
    if isinstance(include_globs, list | tuple) and not include_globs:
        msg = "Config error: scan.include_globs must list at least one pattern."
        raise ValueError(msg)


__all__ = ["validate_config_consistency"]
