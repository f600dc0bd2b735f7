"""Merge model-reference config, version and call config into one mapping."""

from __future__ import annotations

from typing import Any

VERSION_KEY = "version"


def resolve_config(
    reference_config: dict[str, Any] | None,
    version: str | None,
    call_config: dict[str, Any] | None,
) -> dict[str, Any]:
    """
    Shallow merge, lowest to highest precedence: reference config, then
    ``version`` (only when the call config does not set it), then call
    config. Always returns a new dict, empty when nothing was supplied.
    """
    call_config = call_config or {}
    merged: dict[str, Any] = dict(reference_config or {})
    if version is not None and VERSION_KEY not in call_config:
        merged[VERSION_KEY] = version
    merged.update(call_config)
    return merged
