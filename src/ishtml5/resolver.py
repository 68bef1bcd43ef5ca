"""Doctype resolution with a one-week verdict cache.

Receives a validated URL plus cache and fetcher collaborators (protocols, not
concrete classes). One cache read, at most one fetch, at most one cache write.
Errors from either collaborator propagate unchanged; nothing is retried.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from ishtml5.doctype import is_html5_doctype
from ishtml5.models.cache import CachedResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from ishtml5.models.url import ValidUrl
    from ishtml5.protocols import CacheProtocol, FetcherProtocol

CACHE_FRESHNESS = timedelta(days=7)


async def resolve(
    url: ValidUrl,
    cache: CacheProtocol,
    fetcher: FetcherProtocol,
    *,
    detect: Callable[[str], bool] = is_html5_doctype,
    now: datetime | None = None,
) -> bool:
    """Return whether ``url`` declares an HTML5 doctype.

    A cached verdict younger than ``CACHE_FRESHNESS`` is returned without a
    network call. Otherwise the document is fetched, inspected and the new
    verdict upserted over any stale entry.
    """
    log = structlog.get_logger().bind(host=url.host, url=url.canonical)
    now = now or datetime.now(UTC)

    cached = await cache.get_result(url.host, url.canonical)
    if cached is not None and cached.is_fresh(now, CACHE_FRESHNESS):
        log.info("cache_hit", is_html5=cached.is_html5, cached_at=cached.timestamp.isoformat())
        return cached.is_html5

    log.info("cache_miss_fetching", stale=cached is not None)
    body = await fetcher.fetch(url.canonical)
    is_html5 = detect(body)

    await cache.set_result(
        CachedResult(
            host=url.host,
            full_url=url.canonical,
            is_html5=is_html5,
            timestamp=now,
        )
    )
    log.info("verdict_stored", is_html5=is_html5)
    return is_html5
