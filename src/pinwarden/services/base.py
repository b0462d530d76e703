from __future__ import annotations

import aiosqlite
import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional

from .cache import ABSENT, TTLCache

T = TypeVar("T")


class BaseService(ABC, Generic[T]):
    """Base class for SQLite-backed services with caching."""

    def __init__(self, sqlite_path: str, cache_ttl_seconds: int = 120) -> None:
        self._path = sqlite_path
        self._cache: TTLCache[int, T] = TTLCache(default_ttl_seconds=cache_ttl_seconds)
        self._logger = logging.getLogger(f"pinwarden.{self.__class__.__name__.lower()}")

    async def init(self) -> None:
        """Initialize the database schema."""
        async with aiosqlite.connect(self._path) as db:
            await self._create_tables(db)
            await db.commit()

    @abstractmethod
    async def _create_tables(self, db: aiosqlite.Connection) -> None:
        """Create the necessary database tables."""

    @abstractmethod
    def _from_row(self, row: aiosqlite.Row) -> T:
        """Convert a database row to the service's data type."""

    @property
    @abstractmethod
    def _get_query(self) -> str:
        """SQL query for getting data by key."""

    async def get(self, key: int) -> Optional[T]:
        """Get cached data or fetch from database."""
        cached = self._cache.lookup(key)
        if cached is ABSENT:
            return None
        if cached is not None:
            return cached  # type: ignore[return-value]

        async with aiosqlite.connect(self._path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(self._get_query, (int(key),)) as cur:
                row = await cur.fetchone()

        data = self._from_row(row) if row is not None else None
        self._cache.set(key, data)
        return data
