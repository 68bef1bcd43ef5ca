from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ValidUrl(BaseModel):
    """A URL that passed validation. Produced only by ``validate_url``."""

    model_config = ConfigDict(frozen=True)

    scheme: Literal["http", "https"]
    host: str  # Lowercase; IPv6 literals keep their brackets
    canonical: str  # Normalised string form, used as the cache key

    def __str__(self) -> str:
        return self.canonical


class UrlPayload(BaseModel):
    """Request body accepted as a fallback when the query string has no url."""

    url: str | None = None
