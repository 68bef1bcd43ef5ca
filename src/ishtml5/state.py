"""Application state container.

AppState is created once at startup (inside the Starlette lifespan) and stored
on ``app.state.ishtml5``. Route handlers read it from the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from ishtml5.config import Settings
    from ishtml5.protocols import CacheProtocol, FetcherProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every request handler."""

    settings: Settings
    cache: CacheProtocol
    fetcher: FetcherProtocol
    detect: Callable[[str], bool]
    http_client: httpx.AsyncClient | None = None
