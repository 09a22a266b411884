"""PostgreSQL access through a shared asyncpg pool."""

from __future__ import annotations

import logging
from typing import Any, Optional

import asyncpg

from jobjotter.core.config import DatabaseSettings

logger = logging.getLogger(__name__)

_SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        username VARCHAR(25) NOT NULL UNIQUE,
        password TEXT NOT NULL,
        email TEXT,
        first_name TEXT,
        last_name TEXT,
        is_admin BOOLEAN NOT NULL DEFAULT FALSE,
        google_access_token TEXT,
        google_refresh_token TEXT,
        google_token_expiry BIGINT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applications (
        id SERIAL PRIMARY KEY,
        user_id INTEGER NOT NULL REFERENCES users ON DELETE CASCADE,
        company TEXT NOT NULL,
        job_title TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'pending',
        date_applied DATE NOT NULL,
        notes TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS interviews (
        id SERIAL PRIMARY KEY,
        application_id INTEGER NOT NULL REFERENCES applications ON DELETE CASCADE,
        date DATE NOT NULL,
        time TIME NOT NULL,
        location TEXT NOT NULL,
        notes TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS reminders (
        id SERIAL PRIMARY KEY,
        application_id INTEGER NOT NULL REFERENCES applications ON DELETE CASCADE,
        user_id INTEGER NOT NULL REFERENCES users ON DELETE CASCADE,
        reminder_type TEXT NOT NULL,
        date DATE NOT NULL,
        description TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_applications (
        user_id INTEGER NOT NULL REFERENCES users ON DELETE CASCADE,
        application_id INTEGER NOT NULL REFERENCES applications ON DELETE CASCADE,
        PRIMARY KEY (user_id, application_id)
    )
    """,
)


class Database:
    """Thin wrapper over an asyncpg pool using ``$n`` positional parameters.

    Rows are returned as plain dictionaries so services can feed them straight
    into pydantic models.
    """

    def __init__(self, dsn: str, settings: DatabaseSettings) -> None:
        self._dsn = dsn
        self._settings = settings
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Open the pool; safe to call more than once."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._settings.min_pool_size,
            max_size=self._settings.max_pool_size,
            max_inactive_connection_lifetime=self._settings.idle_timeout_seconds,
            timeout=self._settings.connect_timeout_seconds,
        )
        logger.info(
            "Database pool connected (max_size=%s)", self._settings.max_pool_size
        )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            await self.connect()
        assert self._pool is not None
        return self._pool

    async def ensure_schema(self) -> None:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                for statement in _SCHEMA_STATEMENTS:
                    await conn.execute(statement)

    async def fetch(self, query: str, *args: Any) -> list[dict[str, Any]]:
        pool = await self._get_pool()
        rows = await pool.fetch(query, *args)
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *args: Any) -> Optional[dict[str, Any]]:
        pool = await self._get_pool()
        row = await pool.fetchrow(query, *args)
        return dict(row) if row is not None else None

    async def fetchval(self, query: str, *args: Any) -> Any:
        pool = await self._get_pool()
        return await pool.fetchval(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        pool = await self._get_pool()
        return await pool.execute(query, *args)


__all__ = ["Database"]
