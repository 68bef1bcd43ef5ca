"""HTTP document fetcher.

All outbound network I/O goes through a single Fetcher instance shared across
requests. The Fetcher receives an httpx.AsyncClient via constructor
injection; the lifespan owns the client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from ishtml5.errors import ErrorCode, IsHtml5Error

if TYPE_CHECKING:
    from ishtml5.config import FetcherSettings

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
    )


class Fetcher:
    """Single-shot GET fetcher. No retries."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> str:
        """Fetch a URL and return the decoded response body.

        Raises IsHtml5Error(FETCH_FAILED) on network errors, URLs httpx refuses
        to send (e.g. over its length limit) and non-2xx responses.
        """
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("fetch_error", url=url, error=str(exc))
            raise IsHtml5Error(
                ErrorCode.FETCH_FAILED,
                f"Network error fetching {url}: {exc}",
            ) from exc

        if not response.is_success:
            log.warning("fetch_error", url=url, status_code=response.status_code)
            raise IsHtml5Error(
                ErrorCode.FETCH_FAILED,
                f"HTTP {response.status_code} fetching {url}",
            )

        body = response.text
        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(body),
        )
        return body
