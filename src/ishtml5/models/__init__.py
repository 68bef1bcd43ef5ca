from __future__ import annotations

from ishtml5.models.cache import CachedResult
from ishtml5.models.url import UrlPayload, ValidUrl

__all__ = [
    # cache
    "CachedResult",
    # url
    "ValidUrl",
    "UrlPayload",
]
