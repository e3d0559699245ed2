"""Dictionary merging for layered configuration.

Lists in an override replace the base list, unless the override list starts
with the marker ``"+"``, in which case the remaining items are appended.
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND_MARKER = "+"


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_lists(current, value)
        else:
            result[key] = value
    return result


def merge_lists(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists.

    Example:
        >>> merge_lists(["a"], ["b"])
        ['b']
        >>> merge_lists(["a"], ["+", "b"])
        ['a', 'b']
    """
    if override and override[0] == APPEND_MARKER:
        return [*base, *override[1:]]
    return list(override)


__all__ = ["APPEND_MARKER", "deep_merge", "merge_lists"]
