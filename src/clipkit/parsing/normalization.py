"""Text normalization helpers used during tokenizing, parsing and hashing."""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_LINE_BREAK_RE = re.compile(r"\r\n?")
_BOM = "\ufeff"


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_line_endings(text: str) -> str:
    return _LINE_BREAK_RE.sub("\n", text)


def strip_bom(text: str) -> str:
    return text[1:] if text.startswith(_BOM) else text


def normalize_input(text: str, *, unicode_form: str | None = "NFC") -> str:
    """Prepare raw export text: drop the BOM, unify line endings, compose Unicode."""

    prepared = normalize_line_endings(strip_bom(text))
    if unicode_form:
        prepared = unicodedata.normalize(unicode_form, prepared)
    return prepared


def normalize_key(text: str) -> str:
    """Produce stable lower-cased text for identity keys."""

    return text.strip().lower()
