from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional, Tuple

from .models import Item


class TTLCache:
    """In-memory cache of normalized item lists.

    Entries expire ``ttl_seconds`` after insertion. Expired entries are not
    removed on read; the next :meth:`set` for the key replaces them. There is
    no capacity bound since keys are one per upstream query shape.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[List[Item], float, float]] = {}

    def get(self, key: str) -> Optional[List[Item]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        items, inserted_at, ttl = entry
        if self._clock() - inserted_at >= ttl:
            return None
        return list(items)

    def set(self, key: str, items: List[Item], ttl_seconds: Optional[float] = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        self._entries[key] = (list(items), self._clock(), ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
