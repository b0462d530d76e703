from __future__ import annotations

import time

import aiosqlite

from .base import BaseService


class RequestChannelStore(BaseService[int]):
    """Which channel each guild relays pin requests to."""

    def __init__(self, sqlite_path: str, cache_ttl: int = 300) -> None:
        super().__init__(sqlite_path, cache_ttl)

    async def _create_tables(self, db: aiosqlite.Connection) -> None:
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS request_channels (
                guild_id INTEGER PRIMARY KEY,
                channel_id INTEGER NOT NULL,
                updated_at INTEGER NOT NULL
            )
            """
        )

    def _from_row(self, row: aiosqlite.Row) -> int:
        return int(row["channel_id"])

    @property
    def _get_query(self) -> str:
        return "SELECT channel_id FROM request_channels WHERE guild_id = ?"

    async def set(self, guild_id: int, channel_id: int) -> None:
        async with aiosqlite.connect(self._path) as db:
            await db.execute(
                """
                INSERT INTO request_channels (guild_id, channel_id, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(guild_id) DO UPDATE SET
                    channel_id=excluded.channel_id,
                    updated_at=excluded.updated_at
                """,
                (int(guild_id), int(channel_id), int(time.time())),
            )
            await db.commit()
        self._cache.set(int(guild_id), int(channel_id))
        self._logger.info("Request channel for guild %s set to %s", guild_id, channel_id)

    async def delete(self, guild_id: int) -> bool:
        async with aiosqlite.connect(self._path) as db:
            cur = await db.execute("DELETE FROM request_channels WHERE guild_id=?", (int(guild_id),))
            await db.commit()
            removed = cur.rowcount > 0
        self._cache.set(int(guild_id), None)
        if removed:
            self._logger.info("Request channel for guild %s cleared", guild_id)
        return removed
