"""Per-compositor bookkeeping: memoized keys and the classes built so far."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple


class MemoizationTable:
    """Canonical key -> class identifier. Exact match, never evicted."""

    def __init__(self) -> None:
        self._table: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._table.get(key)

    def set(self, key: str, identifier: str) -> None:
        self._table[key] = identifier

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)


@dataclass(frozen=True)
class KnownClass:
    """A class the compositor built, with the request exactly as it was passed."""

    identifier: str
    request: Tuple[Any, ...]

    def __iter__(self) -> Iterator[Any]:
        yield self.identifier
        yield self.request


class ClassRegistry:
    """Append-only record of built classes, in build order."""

    def __init__(self) -> None:
        self._entries: Dict[str, KnownClass] = {}

    def learn(self, identifier: str, request: Tuple[Any, ...]) -> KnownClass:
        if identifier in self._entries:
            raise ValueError(f"Class '{identifier}' is already registered")
        entry = KnownClass(identifier, request)
        self._entries[identifier] = entry
        return entry

    def entries(self) -> List[KnownClass]:
        return list(self._entries.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ClassRegistry", "KnownClass", "MemoizationTable"]
