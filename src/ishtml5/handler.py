"""Request handler for the doctype endpoint.

Receives the raw url parameter and AppState, runs validation then resolution,
and returns the boolean verdict. No Starlette imports; server.py handles the
HTTP wiring and error serialisation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ishtml5.resolver import resolve
from ishtml5.validator import validate_url

if TYPE_CHECKING:
    from ishtml5.state import AppState


async def handle(raw_url: str | None, state: AppState) -> bool:
    """Handle one doctype check. Raises IsHtml5Error on any expected failure."""
    log = structlog.get_logger().bind(raw_url=raw_url)
    log.info("handler_called")

    url = validate_url(raw_url)

    return await resolve(url, state.cache, state.fetcher, detect=state.detect)
