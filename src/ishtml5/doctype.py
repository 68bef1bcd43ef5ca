"""Doctype detection for fetched documents.

Single-pass token scanner over the start of the document. The body is trimmed
first (whitespace and a leading byte-order mark), then the declaration
``<!doctype NAME ...>`` is matched case-insensitively and ``NAME`` is compared
to ``html``. No markup parser is involved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Callable

_DOCTYPE_TOKEN = "<!doctype"
_HTML5_DOCTYPE = "<!doctype html>"
_BOM = "\ufeff"


def _trim(body: str) -> str:
    return body.strip().lstrip(_BOM).lstrip()


def read_doctype_name(body: str) -> str | None:
    """Return the root-element name declared by a leading doctype, or None.

    ``'<!DOCTYPE html PUBLIC "...">'`` → ``'html'``. Returns None when the
    trimmed body does not start with ``<!doctype``, the name is empty, or the
    declaration is never closed by ``>``.
    """
    text = _trim(body)
    if text[: len(_DOCTYPE_TOKEN)].lower() != _DOCTYPE_TOKEN:
        return None

    pos = len(_DOCTYPE_TOKEN)
    end = len(text)
    while pos < end and text[pos].isspace():
        pos += 1

    start = pos
    while pos < end and not text[pos].isspace() and text[pos] != ">":
        pos += 1

    if ">" not in text[pos:]:
        return None

    return text[start:pos] or None


def is_html5_doctype(body: str) -> bool:
    """Return True if the document opens with a doctype whose name is ``html``."""
    name = read_doctype_name(body)
    return name is not None and name.lower() == "html"


def has_html5_doctype_prefix(body: str) -> bool:
    """Return True if the trimmed document starts with ``<!doctype html>``.

    Older check, selected by ``detector.mode: prefix``. ``<!DOCTYPE html
    SYSTEM "about:legacy-compat">`` is rejected here and accepted by
    ``is_html5_doctype``.
    """
    text = _trim(body)
    return text[: len(_HTML5_DOCTYPE)].lower() == _HTML5_DOCTYPE


def detector_for(mode: Literal["doctype_name", "prefix"]) -> Callable[[str], bool]:
    """Return the detection function for a ``DetectorSettings.mode`` value."""
    if mode == "prefix":
        return has_html5_doctype_prefix
    return is_html5_doctype
