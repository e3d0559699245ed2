"""Memoization keys for composition requests.

Each item renders to a string; a parameterized item renders as
``moniker : { key => value, ... }`` with parameters sorted by key. The
renderings are sorted before joining with ``"; "``, so requests holding the
same items in any order share a key.

    >>> memoization_key(["B", ("Counter", "=c", {"start": 1, "name": "x"}), "A"])
    '=c : { name => x, start => 1 }; A; B'
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from .request import ParameterizedItem, RequestItem, normalize_item

UNDEF = "<undef>"
ITEM_SEPARATOR = "; "
LIST_SEPARATOR = "-"


def render_value(value: Any) -> str:
    if value is None:
        return UNDEF
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(render_value(v) for v in value)
    if isinstance(value, Mapping):
        return "{ " + render_parameters(value) + " }"
    return str(value)


def render_parameters(params: Mapping[Any, Any]) -> str:
    return ", ".join(f"{key} => {render_value(params[key])}" for key in sorted(params, key=str))


def render_item(item: RequestItem) -> str:
    if isinstance(item, ParameterizedItem):
        return f"{item.moniker} : {{ {render_parameters(item.parameters)} }}"
    return item.identifier


def memoization_key(items: Iterable[Any]) -> str:
    """Return the order-insensitive key for a composition request."""
    return ITEM_SEPARATOR.join(sorted(render_item(normalize_item(item)) for item in items))


__all__ = ["UNDEF", "memoization_key", "render_item", "render_parameters", "render_value"]
