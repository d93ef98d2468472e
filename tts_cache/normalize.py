"""Request normalization and fingerprinting.

Polly's parameter contract is string-typed, so every option value is
stringified before it is hashed or sent.
"""
from __future__ import annotations

import hashlib
from typing import Any, Dict, Mapping, Optional

import orjson

from .errors import ConfigError

TEXT_KEY = "Text"


def merge_deep(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with ``override`` merged recursively over ``base``.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_deep(current, value)
        else:
            merged[key] = value
    return merged


def stringify_value(key: str, value: Any):
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return [stringify_value(key, v) for v in value]
    if isinstance(value, Mapping):
        raise ConfigError(f"Option {key!r} must be a scalar or a list, got a mapping")
    return str(value)


def stringify(options: Mapping[str, Any]) -> Dict[str, Any]:
    return {str(k): stringify_value(str(k), v) for k, v in options.items()}


def normalize(
    text: str,
    request_options: Optional[Mapping[str, Any]] = None,
    default_options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge per-call options over service defaults into canonical options.

    Per-call values win on key collision. ``text`` always lands under ``Text``.
    """
    merged = merge_deep(default_options or {}, request_options or {})
    merged[TEXT_KEY] = text
    return stringify(merged)


def fingerprint(options: Mapping[str, Any]) -> str:
    """Return a 40-char SHA-1 hex digest of ``options`` sorted by key."""
    ordered = sorted(options.items(), key=lambda kv: kv[0])
    return hashlib.sha1(orjson.dumps(ordered)).hexdigest()


__all__ = ["merge_deep", "stringify", "normalize", "fingerprint", "TEXT_KEY"]
