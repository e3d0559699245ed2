"""Alphabetic serial numbers used to disambiguate colliding class names."""
from __future__ import annotations

import re

_SERIAL_RE = re.compile(r"^[A-Z]+$")


def increment_serial(value: str) -> str:
    """Advance an uppercase letter odometer: ``AA -> AB``, ``AZ -> BA``, ``ZZ -> AAA``."""
    letters = list(value)
    i = len(letters) - 1
    while i >= 0:
        if letters[i] != "Z":
            letters[i] = chr(ord(letters[i]) + 1)
            return "".join(letters)
        letters[i] = "A"
        i -= 1
    return "A" + "".join(letters)


class SerialCounter:
    """Monotonic alphabetic counter owned by a single compositor.

    ``next()`` hands out the current value and advances, so a fresh counter
    yields ``"AA"``, then ``"AB"`` and so on.
    """

    def __init__(self, start: str = "AA") -> None:
        if not _SERIAL_RE.match(start):
            raise ValueError(f"Serial counter start must be uppercase letters, got {start!r}")
        self._value = start

    @property
    def current(self) -> str:
        """The value the next call to ``next()`` will return."""
        return self._value

    def next(self) -> str:
        value = self._value
        self._value = increment_serial(value)
        return value

    def reset(self, value: str) -> None:
        """Rewind to a previously observed ``current`` value."""
        if not _SERIAL_RE.match(value):
            raise ValueError(f"Invalid serial value {value!r}")
        self._value = value

    def __repr__(self) -> str:
        return f"SerialCounter(current={self._value!r})"


__all__ = ["SerialCounter", "increment_serial"]
