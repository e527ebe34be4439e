"""Tag extraction from note text attached to highlights."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import re

from clipkit.parsing.models import AnnotationRecord

TAG_SEPARATORS_RE = re.compile(r"[,;.\n\r]+")
MIN_TAG_LENGTH = 2
MAX_TAG_LENGTH = 50
MAX_TAG_SPACES = 3

_TRAILING_PUNCT_RE = re.compile(r"[.,;:!?]+$")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_WORDS_RE = re.compile(
    r"\b(the|is|are|was|were|have|has|will|would|could|should|does|did)\b",
    re.IGNORECASE,
)


@dataclass(slots=True)
class TagExtractionResult:
    tags: list[str] = field(default_factory=list)
    has_tags: bool = False
    is_tag_only_note: bool = False


@dataclass(frozen=True, slots=True)
class TagOutcome:
    records: list[AnnotationRecord]
    extracted: int


def _clean_tag(candidate: str, tag_case: str) -> str:
    cleaned = candidate.strip()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]
    if cleaned.startswith("@"):
        cleaned = cleaned[1:]
    cleaned = _TRAILING_PUNCT_RE.sub("", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    if tag_case == "uppercase":
        return cleaned.upper()
    if tag_case == "lowercase":
        return cleaned.lower()
    return cleaned


def _is_valid_tag(tag: str) -> bool:
    if not MIN_TAG_LENGTH <= len(tag) <= MAX_TAG_LENGTH:
        return False
    if not tag[0].isalpha():
        return False
    if tag.count(" ") > MAX_TAG_SPACES:
        return False
    return _SENTENCE_WORDS_RE.search(tag) is None


def extract_tags_from_note(note: str, tag_case: str = "lowercase") -> TagExtractionResult:
    """Split a note into tag candidates and keep the ones that look like tags."""

    if not note or not note.strip():
        return TagExtractionResult()

    parts = [part for part in TAG_SEPARATORS_RE.split(note.strip()) if part.strip()]
    tags: list[str] = []
    seen: set[str] = set()
    for part in parts:
        tag = _clean_tag(part, tag_case)
        if not _is_valid_tag(tag) or tag.lower() in seen:
            continue
        seen.add(tag.lower())
        tags.append(tag)

    return TagExtractionResult(
        tags=tags,
        has_tags=bool(tags),
        is_tag_only_note=bool(tags) and len(tags) == len(parts),
    )


def looks_like_tag_note(note: str) -> bool:
    trimmed = note.strip() if note else ""
    if not trimmed:
        return False
    if len(trimmed) < 200 and TAG_SEPARATORS_RE.search(trimmed):
        return True
    return len(trimmed) < 50 and " " not in trimmed


def extract_tags_from_linked_notes(records: list[AnnotationRecord], tag_case: str = "uppercase") -> TagOutcome:
    output: list[AnnotationRecord] = []
    extracted = 0
    for record in records:
        if record.type != "highlight" or not record.note:
            output.append(record)
            continue
        result = extract_tags_from_note(record.note, tag_case)
        known = {tag.lower() for tag in record.tags}
        new_tags = tuple(tag for tag in result.tags if tag.lower() not in known)
        if new_tags:
            extracted += len(new_tags)
            record = replace(record, tags=record.tags + new_tags)
        output.append(record)
    return TagOutcome(records=output, extracted=extracted)
