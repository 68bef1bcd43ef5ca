from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel


class CachedResult(BaseModel):
    """Cached doctype verdict for a single URL."""

    host: str  # Partition key: the URL's host
    full_url: str  # Canonical URL string, unique within a host
    is_html5: bool
    timestamp: datetime  # UTC instant of the last write

    def is_fresh(self, now: datetime, window: timedelta) -> bool:
        return now - self.timestamp < window
