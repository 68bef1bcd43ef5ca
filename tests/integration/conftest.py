"""Integration test fixtures.

Provides a fully wired AppState with in-memory SQLite and a real Fetcher whose
outbound requests are intercepted by respx, plus an httpx client that drives
the Starlette app in-process through ASGITransport (no server, no lifespan).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from ishtml5.config import CacheSettings, Settings
from ishtml5.doctype import is_html5_doctype
from ishtml5.fetcher import Fetcher
from ishtml5.server import create_app
from ishtml5.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ishtml5.cache import Cache


@pytest.fixture()
def settings() -> Settings:
    return Settings(cache=CacheSettings(db_path=":memory:"))


@pytest.fixture()
async def app_state(settings: Settings, cache: Cache) -> AsyncIterator[AppState]:
    """AppState wired with the in-memory cache and a real httpx-backed fetcher."""
    async with httpx.AsyncClient() as http_client:
        yield AppState(
            settings=settings,
            cache=cache,
            fetcher=Fetcher(http_client),
            detect=is_html5_doctype,
            http_client=http_client,
        )


@pytest.fixture()
async def client(settings: Settings, app_state: AppState) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings)
    app.state.ishtml5 = app_state
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
