"""HTTP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the Starlette lifespan context manager
- Route ``/api/Main`` and ``/health``
- Serialise IsHtml5Error into plain-text responses
- Start uvicorn
"""

from __future__ import annotations

import logging
import sys
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from ishtml5 import __version__
from ishtml5.cache import Cache
from ishtml5.config import Settings
from ishtml5.doctype import detector_for
from ishtml5.errors import IsHtml5Error
from ishtml5.fetcher import Fetcher, build_http_client
from ishtml5.handler import handle
from ishtml5.state import AppState
from ishtml5.validator import extract_body_url, extract_url_param

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


async def main_endpoint(request: Request) -> Response:
    """Report whether the document at ``?url=`` declares an HTML5 doctype."""
    state: AppState = request.app.state.ishtml5

    raw_url = extract_url_param(request.query_params.multi_items())
    if raw_url is None and request.method == "POST":
        raw_url = extract_body_url(await request.body())

    try:
        is_html5 = await handle(raw_url, state)
    except IsHtml5Error as exc:
        if exc.is_client_error:
            log.info("request_rejected", code=exc.code, raw_url=raw_url)
        else:
            log.warning("request_failed", code=exc.code, message=exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    except Exception:
        log.error("request_unexpected_error", raw_url=raw_url, exc_info=True)
        raise

    return JSONResponse(is_html5)


async def health(request: Request) -> Response:
    return JSONResponse({"status": "ok", "version": __version__})


# ---------------------------------------------------------------------------
# Lifespan and app factory
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> Starlette:
    """Build the Starlette app. Shared resources are opened in the lifespan."""
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        """Create and tear down all shared resources for the server's lifetime."""
        _setup_logging(settings)
        log.info("server_starting", version=__version__)

        # Resources close in reverse order on shutdown or on a failed startup.
        async with AsyncExitStack() as stack:
            http_client = await stack.enter_async_context(build_http_client(settings.fetcher))

            db_path = Path(settings.cache.db_path).expanduser()
            db_path.parent.mkdir(parents=True, exist_ok=True)
            db = await stack.enter_async_context(aiosqlite.connect(str(db_path)))
            cache = Cache(db)
            await cache.init_db()

            app.state.ishtml5 = AppState(
                settings=settings,
                cache=cache,
                fetcher=Fetcher(http_client),
                detect=detector_for(settings.detector.mode),
                http_client=http_client,
            )

            log.info(
                "server_started",
                version=__version__,
                db_path=str(db_path),
                detector=settings.detector.mode,
            )

            try:
                yield
            finally:
                log.info("server_stopping")

    return Starlette(
        routes=[
            Route("/api/Main", main_endpoint, methods=["GET", "POST"]),
            Route("/health", health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


if __name__ == "__main__":
    main()
