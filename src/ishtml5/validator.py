"""Request validation for the doctype endpoint.

Pure functions, no I/O. Extracts the ``url`` parameter from the query string
(or, as a fallback, a JSON body) and turns it into a ``ValidUrl``. Anything
that would waste a cache key or a network round trip is rejected here.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

from pydantic import ValidationError

from ishtml5.errors import (
    MALFORMED_URL_MESSAGE,
    MISSING_URL_MESSAGE,
    ErrorCode,
    IsHtml5Error,
)
from ishtml5.models.url import UrlPayload, ValidUrl

if TYPE_CHECKING:
    from collections.abc import Iterable

_ALLOWED_PREFIXES = ("http://", "https://")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# RFC 3986 unreserved + reserved characters, plus "%" for escapes
_URI_CHARS_RE = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def extract_url_param(query_params: Iterable[tuple[str, str]]) -> str | None:
    """Return the first ``url`` value from query pairs, matching the key case-insensitively."""
    for key, value in query_params:
        if key.lower() == "url":
            return value
    return None


def extract_body_url(payload: bytes) -> str | None:
    """Return ``url`` from a JSON object body, or None if absent or unparseable."""
    if not payload.strip():
        return None
    try:
        return UrlPayload.model_validate_json(payload).url
    except ValidationError:
        return None


def is_well_formed_absolute_uri(raw: str) -> bool:
    """Check the RFC 3986 character set and escapes of an absolute URI string."""
    if not _URI_CHARS_RE.match(raw) or _BAD_ESCAPE_RE.search(raw):
        return False
    scheme, sep, rest = raw.partition(":")
    return bool(scheme) and bool(sep) and rest.startswith("//")


def validate_url(raw: str | None) -> ValidUrl:
    """Validate a raw url parameter.

    Raises ``IsHtml5Error`` with ``MISSING_PARAMETER`` when ``raw`` is None and
    ``MALFORMED_URL`` unless it starts with ``http://``/``https://``, is a
    well-formed absolute URI and parses with a non-empty host.
    """
    if raw is None:
        raise IsHtml5Error(ErrorCode.MISSING_PARAMETER, MISSING_URL_MESSAGE)

    if not raw.startswith(_ALLOWED_PREFIXES) or not is_well_formed_absolute_uri(raw):
        raise IsHtml5Error(ErrorCode.MALFORMED_URL, MALFORMED_URL_MESSAGE)

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as exc:
        raise IsHtml5Error(ErrorCode.MALFORMED_URL, MALFORMED_URL_MESSAGE) from exc

    hostname = parts.hostname
    if not hostname:
        raise IsHtml5Error(ErrorCode.MALFORMED_URL, MALFORMED_URL_MESSAGE)

    scheme = parts.scheme.lower()
    host = f"[{hostname}]" if ":" in hostname else hostname

    netloc = host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    userinfo, at, _ = parts.netloc.rpartition("@")
    if at:
        netloc = f"{userinfo}@{netloc}"

    canonical = urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))
    return ValidUrl(scheme=scheme, host=host, canonical=canonical)
