"""Composition request items.

Callers write requests as plain Python values: a role identifier string, or a
``(role, moniker, parameters)`` triple for a parameterized role. They are
normalized into ``PlainItem`` / ``ParameterizedItem`` before use.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

from compositor.core.exceptions import InvalidRequestError


@dataclass(frozen=True)
class PlainItem:
    """Apply the named role as-is."""

    identifier: str


@dataclass(frozen=True)
class ParameterizedItem:
    """Generate a role from ``unit`` with ``parameters``, labelled ``moniker``."""

    unit: str
    moniker: str
    parameters: Dict[str, Any] = field(default_factory=dict)


RequestItem = Union[PlainItem, ParameterizedItem]


def _require_name(value: Any, what: str, item: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidRequestError(
            f"{what} must be a non-empty string in request item {item!r}",
            context={"item": repr(item)},
        )
    return value


def normalize_item(item: Any) -> RequestItem:
    """Convert one caller-supplied item into a request item.

    Raises:
        InvalidRequestError: If the item is neither a string nor a
            ``(role, moniker, parameters)`` sequence
    """
    if isinstance(item, (PlainItem, ParameterizedItem)):
        return item
    if isinstance(item, str):
        return PlainItem(_require_name(item, "Role identifier", item))
    if isinstance(item, (tuple, list)):
        if len(item) != 3:
            raise InvalidRequestError(
                f"Parameterized request item must be (role, moniker, parameters), got {item!r}",
                context={"item": repr(item)},
            )
        unit, moniker, parameters = item
        _require_name(unit, "Role identifier", item)
        _require_name(moniker, "Moniker", item)
        if parameters is None:
            parameters = {}
        if not isinstance(parameters, Mapping):
            raise InvalidRequestError(
                f"Parameters must be a mapping in request item {item!r}",
                context={"item": repr(item)},
            )
        return ParameterizedItem(unit, moniker, dict(parameters))
    raise InvalidRequestError(
        f"Unsupported request item of type {type(item).__name__}: {item!r}",
        context={"item": repr(item)},
    )


def normalize_request(items: Iterable[Any]) -> Tuple[RequestItem, ...]:
    return tuple(normalize_item(item) for item in items)


__all__ = [
    "ParameterizedItem",
    "PlainItem",
    "RequestItem",
    "normalize_item",
    "normalize_request",
]
