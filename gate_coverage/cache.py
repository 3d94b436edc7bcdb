from __future__ import annotations
import threading
import time
from typing import Any, Callable, Hashable, Optional

from core.config_loader import settings


class CoverageCache:
    """
    Per-organization cache of computed coverage views.

    Entries expire after ``ttl_seconds``; any shift mutation drops every
    entry of its organization so the next read recomputes.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[int, dict[Hashable, tuple[float, Any]]] = {}
        self._lock = threading.Lock()

    def get(self, org_id: int, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(org_id, {}).get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[org_id][key]
                return None
            return value

    def put(self, org_id: int, key: Hashable, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries.setdefault(org_id, {})[key] = (self._clock(), value)

    def invalidate(self, org_id: int) -> None:
        with self._lock:
            self._entries.pop(org_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


coverage_cache = CoverageCache(ttl_seconds=settings.COVERAGE_CACHE_TTL_SECONDS)
