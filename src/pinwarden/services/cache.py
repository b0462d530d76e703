from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

# Stored for keys known to have no value, so absence can be cached too.
ABSENT = object()


@dataclass
class _Entry:
    value: object
    expires_at: float


class TTLCache(Generic[K, V]):
    """In-memory TTL cache that can also remember that a key has no value."""

    def __init__(self, default_ttl_seconds: int = 120) -> None:
        self._default_ttl = max(1, int(default_ttl_seconds))
        self._store: dict[K, _Entry] = {}

    def lookup(self, key: K) -> object:
        """Return the cached value, ``ABSENT`` for a cached miss, or ``None`` if unknown."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.expires_at < time.monotonic():
            self._store.pop(key, None)
            return None
        return entry.value

    def set(self, key: K, value: Optional[V], ttl_seconds: Optional[int] = None) -> None:
        ttl = self._default_ttl if ttl_seconds is None else max(1, int(ttl_seconds))
        stored = ABSENT if value is None else value
        self._store[key] = _Entry(value=stored, expires_at=time.monotonic() + ttl)

    def delete(self, key: K) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()
