from __future__ import annotations

import time
from typing import Callable, Dict, Optional, Tuple

from ..config import SETTINGS


CacheEntry = Tuple[float, bytes]


class ResponseCache:
    """Encoded results keyed by request, plus the last good result per key.

    Fresh entries expire after ``ttl`` seconds. The last good result for a
    key never expires; it is only evicted once more than ``max_entries``
    keys are remembered.
    """

    def __init__(
        self,
        ttl: float | None = None,
        max_entries: int = 16,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._entries: Dict[str, CacheEntry] = {}
        self._last_good: Dict[str, bytes] = {}
        self._ttl = SETTINGS.cache_ttl if ttl is None else ttl
        self._max_entries = max_entries
        self._clock = clock

    def get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if not entry:
            return None
        timestamp, data = entry
        if self._clock() - timestamp > self._ttl:
            self._entries.pop(key, None)
            return None
        return data

    def put(self, key: str, data: bytes) -> None:
        if key not in self._entries and len(self._entries) >= self._max_entries:
            oldest = min(self._entries.items(), key=lambda item: item[1][0])[0]
            self._entries.pop(oldest, None)
        self._entries[key] = (self._clock(), data)

        self._last_good.pop(key, None)
        if len(self._last_good) >= self._max_entries:
            self._last_good.pop(next(iter(self._last_good)))
        self._last_good[key] = data

    def last_good(self, key: str) -> Optional[bytes]:
        return self._last_good.get(key)

    def clear(self) -> None:
        self._entries.clear()
        self._last_good.clear()


CACHE = ResponseCache()
