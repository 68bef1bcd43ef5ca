"""Unit tests for the package version and the User-Agent derived from it."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import httpx
import respx

import ishtml5
from ishtml5.config import FetcherSettings
from ishtml5.fetcher import Fetcher, build_http_client


def test_dunder_version_matches_package_metadata_or_fallback() -> None:
    try:
        expected = version("ishtml5")
    except PackageNotFoundError:
        expected = "0.0.0+unknown"

    assert ishtml5.__version__ == expected


def test_user_agent_carries_version() -> None:
    assert ishtml5.USER_AGENT == f"ishtml5/{ishtml5.__version__}"
    assert FetcherSettings().user_agent == ishtml5.USER_AGENT


@respx.mock
async def test_outbound_fetch_sends_default_user_agent() -> None:
    route = respx.get("https://example.com/").mock(
        return_value=httpx.Response(200, text="<!DOCTYPE html>")
    )
    async with build_http_client(FetcherSettings()) as client:
        await Fetcher(client).fetch("https://example.com/")

    assert route.calls.last.request.headers["User-Agent"] == ishtml5.USER_AGENT
