"""Lightweight span profiler.

``span()`` is a no-op unless a ``Profiler`` has been activated for the current
context with ``enable_profiler()``. The CLI activates one for ``--profile``.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional

_ACTIVE_PROFILER: ContextVar[Optional["Profiler"]] = ContextVar("_ACTIVE_PROFILER", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any] = field(default_factory=dict)


class Profiler:
    """Collects nested timing spans."""

    def __init__(self) -> None:
        self._records: List[SpanRecord] = []
        self._depth = 0

    @property
    def records(self) -> List[SpanRecord]:
        return list(self._records)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        depth = self._depth
        self._depth += 1
        start = perf_counter()
        try:
            yield
        finally:
            self._depth -= 1
            elapsed = (perf_counter() - start) * 1000.0
            self._records.append(SpanRecord(name=name, duration_ms=elapsed, depth=depth, meta=dict(meta)))

    def totals_ms(self) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for record in self._records:
            totals[record.name] = totals.get(record.name, 0.0) + record.duration_ms
        return totals

    def format_summary(self) -> str:
        lines = ["profile (ms):"]
        for name, total in sorted(self.totals_ms().items(), key=lambda kv: kv[1], reverse=True):
            lines.append(f"  {total:9.2f}  {name}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"spans": [asdict(r) for r in self._records], "totals_ms": self.totals_ms()}


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[Profiler]:
    token = _ACTIVE_PROFILER.set(profiler)
    try:
        yield profiler
    finally:
        _ACTIVE_PROFILER.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _ACTIVE_PROFILER.get()
    if profiler is None:
        yield
        return
    with profiler.span(name, **meta):
        yield


__all__ = ["Profiler", "SpanRecord", "enable_profiler", "span"]
