from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    MISSING_PARAMETER = "MISSING_PARAMETER"
    MALFORMED_URL = "MALFORMED_URL"
    FETCH_FAILED = "FETCH_FAILED"
    CACHE_FAILED = "CACHE_FAILED"


MISSING_URL_MESSAGE = "Please pass a url on the query string or in the request body"
MALFORMED_URL_MESSAGE = "Please pass a VALID url"

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.MISSING_PARAMETER: 400,
    ErrorCode.MALFORMED_URL: 400,
    ErrorCode.FETCH_FAILED: 502,
    ErrorCode.CACHE_FAILED: 500,
}


class IsHtml5Error(Exception):
    """Raised by validation, fetch and cache code for all expected failures.

    Caught by server.py and serialised into a plain-text HTTP response.
    Never catch this inside business logic. Let it propagate to the
    HTTP layer so the caller receives the status code for its category.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def status_code(self) -> int:
        return _STATUS_BY_CODE[self.code]

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
            }
        }
