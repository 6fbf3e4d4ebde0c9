"""Helpers for safe debug logging.

Car records carry personal names in ``owner``, and scan payloads can be
large.  This module redacts owner fields and truncates long values before
they reach DEBUG logs.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset({"owner"})


def redact_for_log(
    value: Any,
    *,
    max_string: int = 512,
    redact_owners: bool = True,
    _depth: int = 0,
) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if redact_owners and key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(
                    v, max_string=max_string, redact_owners=redact_owners, _depth=_depth + 1
                )
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [
            redact_for_log(v, max_string=max_string, redact_owners=redact_owners, _depth=_depth + 1)
            for v in value
        ]

    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return redact_for_log(model_dump(), max_string=max_string, redact_owners=redact_owners, _depth=_depth + 1)

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)


def preview_payload(payload: bytes, *, max_string: int = 512, redact_owners: bool = True) -> Any:
    """Decode a JSON payload and redact it; fall back to a size summary."""
    try:
        parsed = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return redact_for_log(payload)
    return redact_for_log(parsed, max_string=max_string, redact_owners=redact_owners)
