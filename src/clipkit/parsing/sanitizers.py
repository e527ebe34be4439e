"""Title, author and content sanitizers applied while parsing blocks."""

from __future__ import annotations

from dataclasses import dataclass
import re

from clipkit.parsing.normalization import normalize_whitespace

UNKNOWN_AUTHOR = "Unknown"
UNTITLED = "Untitled"

SIDELOAD_EXTENSION_RE = re.compile(r"\.(pdf|epub|mobi|azw3?|txt|doc|docx|html|fb2|rtf)", re.IGNORECASE)
EBOK_SUFFIX_RE = re.compile(r"_EBOK$", re.IGNORECASE)

_EDITION_MARKERS = (
    "Spanish Edition",
    "English Edition",
    "Edición española",
    "Edición en español",
    "French Edition",
    "Edition française",
    "Version française",
    "German Edition",
    "Deutsche Ausgabe",
    "Italian Edition",
    "Edizione italiana",
    "Portuguese Edition",
    "Edição portuguesa",
    "Kindle Edition",
)

_EDITION_PATTERNS: tuple[re.Pattern[str], ...] = (
    *(re.compile(rf"\s*\({re.escape(marker)}\)", re.IGNORECASE) for marker in _EDITION_MARKERS),
    re.compile(r"\s*\(Edition \d+\)", re.IGNORECASE),
)

TITLE_NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    *_EDITION_PATTERNS,
    re.compile(r"\s*\[Print Replica\]", re.IGNORECASE),
    re.compile(r"\s*\[eBook\]", re.IGNORECASE),
    re.compile(r"\s*\[Kindle\]", re.IGNORECASE),
    # series numbering such as "01 Title"
    re.compile(r"^\d{1,2}\s+"),
    re.compile(r"\s*\(\s*\)$"),
    re.compile(r"\s*\[\s*\]$"),
)

DRM_LIMIT_MESSAGES: tuple[str, ...] = (
    "You have reached the clipping limit",
    "Has alcanzado el límite de recortes",
    "Você atingiu o limite de recortes",
    "Sie haben das Markierungslimit erreicht",
    "Vous avez atteint la limite",
    "<You have reached the clipping limit for this item>",
    "您已达到本书的剪贴限制",
    "このアイテムのクリップ上限に達しました",
)


@dataclass(frozen=True, slots=True)
class TitleAuthor:
    title: str
    author: str


@dataclass(frozen=True, slots=True)
class SanitizedTitle:
    title: str
    was_cleaned: bool


@dataclass(frozen=True, slots=True)
class SanitizedContent:
    content: str
    is_empty: bool
    is_limit_reached: bool


def sanitize_title(title: str) -> SanitizedTitle:
    """Strip sideload extensions, store suffixes and edition noise from a title."""

    clean = SIDELOAD_EXTENSION_RE.sub("", title, count=1)
    clean = EBOK_SUFFIX_RE.sub("", clean)
    for pattern in TITLE_NOISE_PATTERNS:
        clean = pattern.sub("", clean)
    clean = normalize_whitespace(clean)
    return SanitizedTitle(title=clean, was_cleaned=clean != normalize_whitespace(title))


def _is_edition_marker(parenthetical: str) -> bool:
    return any(pattern.fullmatch(parenthetical) for pattern in _EDITION_PATTERNS)


def _trailing_paren_start(text: str) -> int:
    """Index of the '(' balancing the final ')', scanning right to left, or -1."""

    if not text.endswith(")"):
        return -1
    depth = 0
    for index in range(len(text) - 1, -1, -1):
        char = text[index]
        if char == ")":
            depth += 1
        elif char == "(":
            depth -= 1
            if depth == 0:
                return index
    return -1


def split_title_author(raw_title: str) -> TitleAuthor:
    """Split `Title (Author)` at the last balanced top-level parenthesis pair.

    Titles without a trailing parenthetical get the "Unknown" author. A
    trailing edition marker such as "(Kindle Edition)" is not taken as the
    author.
    """

    trimmed = raw_title.strip()
    start = _trailing_paren_start(trimmed)
    if start == -1 or _is_edition_marker(trimmed[start:]):
        return TitleAuthor(title=trimmed, author=UNKNOWN_AUTHOR)

    title = trimmed[:start].strip()
    author = normalize_whitespace(trimmed[start + 1 : -1])
    if not title:
        return TitleAuthor(title=trimmed, author=UNKNOWN_AUTHOR)
    return TitleAuthor(title=title, author=author or UNKNOWN_AUTHOR)


def is_sideloaded(raw_title: str) -> bool:
    return bool(SIDELOAD_EXTENSION_RE.search(raw_title) or EBOK_SUFFIX_RE.search(raw_title.strip()))


def is_limit_message(content: str) -> bool:
    folded = content.casefold()
    return any(message.casefold() in folded for message in DRM_LIMIT_MESSAGES)


def sanitize_content(content: str) -> SanitizedContent:
    trimmed = content.strip()
    if not trimmed:
        return SanitizedContent(content="", is_empty=True, is_limit_reached=False)
    return SanitizedContent(
        content=normalize_whitespace(trimmed),
        is_empty=False,
        is_limit_reached=is_limit_message(trimmed),
    )
