"""Block-level parsing: language detection, metadata line and record assembly."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
import logging
import re
from typing import Iterable

from clipkit.parsing.dates import parse_localized_date
from clipkit.parsing.diagnostics import WarningCollector
from clipkit.parsing.identity import generate_clipping_id
from clipkit.parsing.languages import (
    FALLBACK_LANGUAGE,
    LANGUAGE_PATTERNS,
    Language,
    LanguagePatterns,
    contains_keyword,
)
from clipkit.parsing.models import AnnotationRecord, ClippingType, Location, QualityFlags, RawBlock
from clipkit.parsing.normalization import normalize_whitespace
from clipkit.parsing.sanitizers import (
    UNTITLED,
    is_sideloaded,
    sanitize_content,
    sanitize_title,
    split_title_author,
)
from clipkit.parsing.text_cleaner import clean_text

logger = logging.getLogger(__name__)

METADATA_PREFIX = "-"
TITLE_LINE_INDEX = 0
METADATA_LINE_INDEX = 1
CONTENT_START_INDEX = 2

# optional "#", ":" or "No." between a keyword and its number
_NUMBER_AFTER = r"[^\w|]{0,4}?(?:No\.?)?[^\w|]{0,3}?(\d+)(?:\s*-\s*(\d+))?"
_NUMBER_BEFORE = r"(\d+)(?:\s*-\s*(\d+))?\s*"
_DATE_TRIM = " \t:,"


@dataclass(frozen=True, slots=True)
class MetadataFields:
    """Values extracted from a block's second line."""

    type: ClippingType
    page: int | None
    location: Location
    date_raw: str


def _find_type(metadata_line: str, patterns: LanguagePatterns) -> ClippingType | None:
    for clipping_type, keywords in patterns.type_keywords():
        if contains_keyword(metadata_line, keywords):
            return clipping_type
    return None


def detect_block_language(metadata_line: str) -> Language:
    """Pick the language whose keywords best explain one metadata line.

    A language matching both a type keyword and its added-on keyword wins over
    one that only matches a type keyword, so short shared words like "nota"
    resolve to the right table. Falls back to English.
    """

    type_only: Language | None = None
    for language, patterns in LANGUAGE_PATTERNS.items():
        if _find_type(metadata_line, patterns) is None:
            continue
        if contains_keyword(metadata_line, patterns.added_on):
            return language
        if type_only is None:
            type_only = language
    return type_only or FALLBACK_LANGUAGE


def detect_language(blocks: Iterable[RawBlock], sample_size: int = 10) -> Language:
    """Majority vote of per-block detection over the first `sample_size` blocks."""

    votes: Counter[Language] = Counter()
    for position, block in enumerate(blocks):
        if position >= sample_size:
            break
        if len(block.lines) > METADATA_LINE_INDEX:
            votes[detect_block_language(block.lines[METADATA_LINE_INDEX])] += 1
    if not votes:
        return FALLBACK_LANGUAGE
    return votes.most_common(1)[0][0]


def _search_number(text: str, keywords: tuple[str, ...]) -> tuple[int, int | None] | None:
    for keyword in keywords:
        escaped = re.escape(keyword)
        for template in (escaped + _NUMBER_AFTER, _NUMBER_BEFORE + escaped):
            match = re.search(template, text, re.IGNORECASE)
            if match is None:
                continue
            start = int(match.group(1))
            end = int(match.group(2)) if match.group(2) else None
            return start, end
    return None


def parse_metadata_line(metadata_line: str, language: Language) -> MetadataFields:
    """Extract type, page, location and raw date from a metadata line.

    Unparseable pieces fall back to their empty values; this never raises.
    """

    patterns = LANGUAGE_PATTERNS[language]
    clipping_type = _find_type(metadata_line, patterns) or "article"

    numbers_part = metadata_line
    date_raw = ""
    for keyword in patterns.added_on:
        match = re.search(re.escape(keyword), metadata_line, re.IGNORECASE)
        if match is not None:
            numbers_part = metadata_line[: match.start()]
            date_raw = metadata_line[match.end() :].split("|", 1)[0].strip(_DATE_TRIM)
            break
    if not date_raw and "|" in metadata_line:
        # unknown added-on keyword, the date is still the last segment
        candidate = metadata_line.rsplit("|", 1)[1].strip(_DATE_TRIM)
        if re.search(r"\d{4}", candidate):
            date_raw = candidate
            numbers_part = metadata_line.rsplit("|", 1)[0]

    page_match = _search_number(numbers_part, patterns.page)
    page = page_match[0] if page_match else None

    location = Location()
    location_match = _search_number(numbers_part, patterns.location)
    if location_match is not None:
        start, end = location_match
        raw = f"{start}-{end}" if end is not None else str(start)
        location = Location(raw=raw, start=start, end=end)

    return MetadataFields(type=clipping_type, page=page, location=location, date_raw=date_raw)


def _content_lines(lines: list[str]) -> str:
    return "\n".join(normalize_whitespace(line) for line in lines[CONTENT_START_INDEX:] if line.strip())


def parse_block(
    block: RawBlock,
    warnings: WarningCollector,
    language: Language | None = None,
) -> AnnotationRecord | None:
    """Build one record from a raw block, or None when no title is available.

    A metadata line without the leading "-" is reported as an
    `unknown_format` warning and yields a degraded `article` record.
    """

    if not block.lines or not block.lines[TITLE_LINE_INDEX].strip():
        warnings.add("empty_block", "Block has no title line", block.index)
        return None

    title_line = block.lines[TITLE_LINE_INDEX].strip()
    metadata_line = block.lines[METADATA_LINE_INDEX].strip() if len(block.lines) > METADATA_LINE_INDEX else ""
    block_language = language or detect_block_language(metadata_line)

    if metadata_line.startswith(METADATA_PREFIX):
        fields = parse_metadata_line(metadata_line.lstrip(METADATA_PREFIX).strip(), block_language)
    else:
        warnings.add(
            "unknown_format",
            f"Metadata line does not start with {METADATA_PREFIX!r}: {metadata_line[:60]!r}",
            block.index,
        )
        logger.debug("Block %d has an unrecognized metadata line", block.index)
        fields = MetadataFields(type="article", page=None, location=Location(), date_raw="")

    split = split_title_author(title_line)
    title = sanitize_title(split.title)
    content_raw = _content_lines(block.lines)
    if fields.type == "bookmark":
        content_raw = ""
    cleaned = clean_text(content_raw)
    content = sanitize_content(cleaned.text)

    date = parse_localized_date(fields.date_raw, block_language) if fields.date_raw else None
    if fields.date_raw and date is None:
        logger.debug("Block %d date %r could not be parsed", block.index, fields.date_raw)

    final_title = title.title or UNTITLED
    return AnnotationRecord(
        id=generate_clipping_id(final_title, fields.location.raw, fields.type, content.content),
        title=final_title,
        title_raw=title_line,
        author=split.author,
        author_raw=split.author,
        content=content.content,
        content_raw=content_raw,
        type=fields.type,
        location=fields.location,
        date_raw=fields.date_raw,
        language=block_language.value,
        block_index=block.index,
        page=fields.page,
        date=date,
        is_limit_reached=content.is_limit_reached,
        is_empty=content.is_empty,
        source="sideload" if is_sideloaded(split.title) else "kindle",
        word_count=len(content.content.split()),
        char_count=len(content.content),
        quality=QualityFlags(
            title_was_cleaned=title.was_cleaned,
            content_was_cleaned=cleaned.was_cleaned,
        ),
    )
