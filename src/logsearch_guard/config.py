"""YAML/dict config loader for logsearch-guard.

Supports loading from a YAML file or a plain dict (for embedding
in a larger tool-server config).

Example YAML:

    logsearch_guard:
      mask_sensitive_info: true    # omit to read the env var on every call
      toggle_key: MASK_SENSITIVE_INFO
      max_passes: 10
      skip_categories:
        - ADDRESS
      allow_list:
        - support@example.com
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from .masker import DEFAULT_MAX_PASSES, DEFAULT_TOGGLE_KEY, MaskerConfig, PatternMasker

_NORMALIZED_KEYS = frozenset({
    "mask_sensitive_info", "toggle_key", "max_passes", "skip_categories", "allow_list",
})


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "logsearch_guard" key or flat
    if "logsearch_guard" in data:
        data = data["logsearch_guard"] or {}

    max_passes = int(data.get("max_passes", DEFAULT_MAX_PASSES))
    if max_passes < 1:
        raise ValueError(f"max_passes must be at least 1, got {max_passes}")

    return {
        "mask_sensitive_info": data.get("mask_sensitive_info"),
        "toggle_key": data.get("toggle_key", DEFAULT_TOGGLE_KEY),
        "max_passes": max_passes,
        "skip_categories": {s.upper() for s in data.get("skip_categories", [])},
        "allow_list": set(data.get("allow_list", [])),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # optional dependency
    with open(path) as f:
        return load_config(yaml.safe_load(f))


def create_masker(config: dict[str, Any] | None = None) -> PatternMasker:
    """Create a configured masker from a config dict.

    A pinned `mask_sensitive_info` value replaces the environment as the
    toggle source; otherwise the env var is read on every call.
    """
    cfg = config if config is not None and _NORMALIZED_KEYS <= config.keys() else load_config(config)

    masker_config = MaskerConfig(
        toggle_key=cfg["toggle_key"],
        max_passes=cfg["max_passes"],
        skip_categories=cfg["skip_categories"],
        allow_list=cfg["allow_list"],
    )

    pinned = cfg["mask_sensitive_info"]
    if pinned is None:
        return PatternMasker(masker_config)
    return PatternMasker(masker_config, source=lambda _key: pinned)
