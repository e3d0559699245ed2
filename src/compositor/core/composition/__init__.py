"""Class composition: requests, memoization keys, and the compositor."""

from .canonical import memoization_key
from .compositor import Compositor
from .memo import ClassRegistry, KnownClass, MemoizationTable
from .request import ParameterizedItem, PlainItem, normalize_item, normalize_request

__all__ = [
    "ClassRegistry",
    "Compositor",
    "KnownClass",
    "MemoizationTable",
    "ParameterizedItem",
    "PlainItem",
    "memoization_key",
    "normalize_item",
    "normalize_request",
]
