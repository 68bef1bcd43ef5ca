"""Shared test fixtures for the ishtml5 test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import aiosqlite
import pytest

from ishtml5.cache import Cache
from ishtml5.validator import validate_url

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ishtml5.models.url import ValidUrl


@pytest.fixture()
async def cache() -> AsyncIterator[Cache]:
    """Cache backed by an in-memory SQLite database."""
    async with aiosqlite.connect(":memory:") as db:
        cache = Cache(db)
        await cache.init_db()
        yield cache


@pytest.fixture()
def example_url() -> ValidUrl:
    return validate_url("https://example.com/index.html")
