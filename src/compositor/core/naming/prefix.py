"""Prefix rewriting for role identifiers.

A prefix map lets callers write short role names and have them expanded into
importable identifiers::

    >>> rewrite_prefix({"": "myapp.roles.", "=": ""}, "PieEater", "=other.Role")
    ['myapp.roles.PieEater', 'other.Role']

The longest matching prefix wins. The empty prefix matches everything and so
acts as the default; mapping a prefix to ``""`` strips it. A callable target
receives the remainder of the identifier and returns the rewritten string.
"""
from __future__ import annotations

from typing import Callable, List, Mapping, Union

from ..exceptions import InvalidRequestError

PrefixTarget = Union[str, Callable[[str], str]]


def _ordered_prefixes(prefix_map: Mapping[str, PrefixTarget]) -> List[str]:
    return sorted(prefix_map, key=len, reverse=True)


def rewrite_prefix(prefix_map: Mapping[str, PrefixTarget], *identifiers: str) -> List[str]:
    """Expand ``identifiers`` according to ``prefix_map``.

    Args:
        prefix_map: Mapping of prefix to replacement string or callable
        *identifiers: Identifiers to rewrite

    Returns:
        Rewritten identifiers in input order

    Raises:
        InvalidRequestError: If an identifier is not a string
    """
    prefixes = _ordered_prefixes(prefix_map)
    rewritten: List[str] = []
    for identifier in identifiers:
        if not isinstance(identifier, str):
            raise InvalidRequestError(
                f"Role identifier must be a string, got {type(identifier).__name__}",
                context={"identifier": repr(identifier)},
            )
        for prefix in prefixes:
            if not identifier.startswith(prefix):
                continue
            target = prefix_map[prefix]
            rest = identifier[len(prefix):]
            identifier = target(rest) if callable(target) else f"{target}{rest}"
            break
        rewritten.append(identifier)
    return rewritten


__all__ = ["PrefixTarget", "rewrite_prefix"]
