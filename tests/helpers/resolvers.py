"""Resolvers that record calls, for asserting what a composition loaded."""
from __future__ import annotations

import threading
import time
from typing import Any, List, Mapping, Optional, Tuple

from compositor.core.roles import RoleResolver


class CountingResolver(RoleResolver):
    """RoleResolver that records every resolve() call."""

    def __init__(self, roles: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(roles)
        self.calls: List[Tuple[str, Optional[dict]]] = []
        self._calls_lock = threading.Lock()

    def resolve(self, identifier, parameters=None, *, moniker=None):
        with self._calls_lock:
            self.calls.append((identifier, dict(parameters) if parameters is not None else None))
        return super().resolve(identifier, parameters, moniker=moniker)


class SlowResolver(CountingResolver):
    """Sleeps on every resolve() so concurrent callers overlap."""

    def __init__(self, delay: float = 0.05) -> None:
        super().__init__()
        self.delay = delay

    def resolve(self, identifier, parameters=None, *, moniker=None):
        time.sleep(self.delay)
        return super().resolve(identifier, parameters, moniker=moniker)
