"""Dotted key-path lookup over mappings and objects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

MISSING: Any = object()


def resolve_key_path(obj: Any, key_path: str, default: Any = MISSING) -> Any:
    """Walk ``key_path`` (e.g. ``"data.items"``) through ``obj``.

    Each component is looked up as a mapping key, then as a list index when it
    is numeric and ``obj`` is a sequence, then as an attribute.

    Args:
        obj: Root object
        key_path: Dot-separated path; empty components are ignored
        default: Returned when a component is missing

    Returns:
        The value at the end of the path, or ``default``

    Examples:
        >>> resolve_key_path({"data": {"items": [1, 2]}}, "data.items")
        [1, 2]
        >>> resolve_key_path({"data": [{"id": 7}]}, "data.0.id")
        7
    """
    current = obj
    for key in (part for part in key_path.split(".") if part):
        if isinstance(current, Mapping):
            if key not in current:
                return default
            current = current[key]
        elif (
            isinstance(current, Sequence)
            and not isinstance(current, (str, bytes))
            and key.lstrip("-").isdigit()
        ):
            index = int(key)
            if not -len(current) <= index < len(current):
                return default
            current = current[index]
        elif hasattr(current, key):
            current = getattr(current, key)
        else:
            return default
    return current
