"""ishtml5: HTTP service that reports whether a page declares an HTML5 doctype."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ishtml5")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0+unknown"

# Sent on every outbound fetch unless overridden by fetcher.user_agent
USER_AGENT = f"ishtml5/{__version__}"
