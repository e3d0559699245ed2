"""Name handling for composed classes: prefix rewriting, identifiers, serials."""

from .identifiers import (
    SEPARATOR,
    is_valid_basename,
    join_identifier,
    naming_segment,
    validate_basename,
)
from .prefix import rewrite_prefix
from .serial import SerialCounter, increment_serial

__all__ = [
    "SEPARATOR",
    "SerialCounter",
    "increment_serial",
    "is_valid_basename",
    "join_identifier",
    "naming_segment",
    "rewrite_prefix",
    "validate_basename",
]
