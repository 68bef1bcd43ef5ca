"""SQLite cache of doctype verdicts.

One row per ``(host, full_url)``. Freshness is not stored: callers compare
``timestamp`` against their own window, and stale rows are simply overwritten
by the next write. There is no eviction.

``aiosqlite.Error`` is logged and re-raised as ``IsHtml5Error(CACHE_FAILED)``
so that a broken store surfaces as a server error instead of a silent miss.
"""

from __future__ import annotations

from datetime import datetime

import aiosqlite
import structlog

from ishtml5.errors import ErrorCode, IsHtml5Error
from ishtml5.models.cache import CachedResult

log = structlog.get_logger()

# Leading ``host`` in the primary key keeps per-host scans on the index.
_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS tested_urls (
    host      TEXT NOT NULL,
    full_url  TEXT NOT NULL,
    is_html5  INTEGER NOT NULL,
    timestamp TEXT NOT NULL,
    PRIMARY KEY (host, full_url)
)
"""

_UPSERT = """
INSERT INTO tested_urls (host, full_url, is_html5, timestamp)
VALUES (?, ?, ?, ?)
ON CONFLICT (host, full_url) DO UPDATE SET
    is_html5 = excluded.is_html5,
    timestamp = excluded.timestamp
"""


class Cache:
    """SQLite-backed verdict cache implementing CacheProtocol."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_TABLE)
        await self._db.commit()

    async def get_result(self, host: str, full_url: str) -> CachedResult | None:
        """Read an entry by exact key. Returns ``None`` on miss, fresh or not."""
        try:
            cursor = await self._db.execute(
                "SELECT host, full_url, is_html5, timestamp FROM tested_urls "
                "WHERE host = ? AND full_url = ?",
                (host, full_url),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            log.error("cache_read_error", host=host, full_url=full_url, exc_info=True)
            raise IsHtml5Error(
                ErrorCode.CACHE_FAILED,
                f"Cache read failed for {full_url}: {exc}",
            ) from exc

        if row is None:
            return None

        return CachedResult(
            host=row[0],
            full_url=row[1],
            is_html5=bool(row[2]),
            timestamp=datetime.fromisoformat(row[3]),
        )

    async def set_result(self, result: CachedResult) -> None:
        """Upsert an entry, replacing any previous row for the same key."""
        try:
            await self._db.execute(
                _UPSERT,
                (
                    result.host,
                    result.full_url,
                    int(result.is_html5),
                    result.timestamp.isoformat(),
                ),
            )
            await self._db.commit()
        except aiosqlite.Error as exc:
            log.error(
                "cache_write_error",
                host=result.host,
                full_url=result.full_url,
                exc_info=True,
            )
            raise IsHtml5Error(
                ErrorCode.CACHE_FAILED,
                f"Cache write failed for {result.full_url}: {exc}",
            ) from exc
