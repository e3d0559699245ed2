"""Hierarchical class identifiers (``Basename::Segment::Segment``)."""
from __future__ import annotations

import re
from typing import Iterable

from ..exceptions import ConfigurationError

SEPARATOR = "::"
DISAMBIGUATION_MARKER = "="

BASENAME_PATTERN = r"^[A-Za-z_]\w*(?:::\w+)*$"
_BASENAME_RE = re.compile(BASENAME_PATTERN)


def is_valid_basename(value: object) -> bool:
    return isinstance(value, str) and bool(_BASENAME_RE.match(value))


def validate_basename(value: object) -> str:
    """Return ``value`` if it is a valid hierarchical name, else raise ConfigurationError."""
    if not is_valid_basename(value):
        raise ConfigurationError(
            f"Invalid class basename {value!r}: expected names like 'MyApp::Class'",
            context={"basename": repr(value)},
        )
    return value  # type: ignore[return-value]


def naming_segment(raw: str, *, flatten: bool) -> str:
    """Turn a role identifier or moniker into one segment of a class identifier.

    Dotted Python paths use ``::`` like the rest of the identifier. When
    ``flatten`` is set (every segment after the first) path separators are
    collapsed to ``_`` so the segment stays a single level. A single leading
    ``=`` is always dropped.
    """
    segment = raw.replace(".", SEPARATOR)
    if flatten:
        segment = segment.replace(SEPARATOR, "_")
    if segment.startswith(DISAMBIGUATION_MARKER):
        segment = segment[len(DISAMBIGUATION_MARKER):]
    return segment


def join_identifier(basename: str, segments: Iterable[str]) -> str:
    return SEPARATOR.join([basename, *segments])


def last_segment(identifier: str) -> str:
    return identifier.rsplit(SEPARATOR, 1)[-1]


__all__ = [
    "SEPARATOR",
    "DISAMBIGUATION_MARKER",
    "BASENAME_PATTERN",
    "is_valid_basename",
    "validate_basename",
    "naming_segment",
    "join_identifier",
    "last_segment",
]
