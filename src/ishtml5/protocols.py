"""Protocol interfaces for swappable components.

The resolver and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Other stores (e.g. a table service) to replace SQLite without touching the resolver
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ishtml5.models.cache import CachedResult


class CacheProtocol(Protocol):
    """Interface for the verdict cache backend."""

    async def get_result(self, host: str, full_url: str) -> CachedResult | None: ...

    async def set_result(self, result: CachedResult) -> None: ...


class FetcherProtocol(Protocol):
    """Interface for the HTTP document fetcher."""

    async def fetch(self, url: str) -> str: ...
