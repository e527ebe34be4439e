"""Merge or flag overlapping highlights from the same book."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from clipkit.parsing.models import AnnotationRecord, Location
from clipkit.processing.similarity import word_set
from clipkit.processing.stats import book_key

logger = logging.getLogger(__name__)

LOCATION_GAP_TOLERANCE = 5
MIN_WORD_OVERLAP = 0.5


@dataclass(frozen=True, slots=True)
class MergeOutcome:
    records: list[AnnotationRecord]
    merged: int


def can_merge(current: AnnotationRecord, candidate: AnnotationRecord) -> bool:
    """True when `candidate` starts near `current` and repeats most of its words."""

    if book_key(current) != book_key(candidate):
        return False
    if candidate.location.start > current.location.last + LOCATION_GAP_TOLERANCE:
        return False

    current_text = current.content.lower()
    candidate_text = candidate.content.lower()
    if not current_text or not candidate_text:
        return False
    if current_text in candidate_text or candidate_text in current_text:
        return True

    current_words = word_set(current_text)
    candidate_words = word_set(candidate_text)
    smaller = min(len(current_words), len(candidate_words))
    return smaller > 0 and len(current_words & candidate_words) >= smaller * MIN_WORD_OVERLAP


def merge_pair(first: AnnotationRecord, second: AnnotationRecord) -> AnnotationRecord:
    base, other = (first, second) if len(first.content) >= len(second.content) else (second, first)
    start = min(first.location.start, second.location.start)
    end = max(first.location.last, second.location.last)

    if first.date and second.date:
        latest = first if first.date >= second.date else second
    else:
        latest = first if first.date else second

    tags = base.tags + tuple(tag for tag in other.tags if tag not in base.tags)
    return replace(
        base,
        location=Location(raw=f"{start}-{end}", start=start, end=end),
        date=latest.date,
        date_raw=latest.date_raw,
        block_index=min(first.block_index, second.block_index),
        tags=tags,
        note=base.note or other.note,
        linked_note_id=base.linked_note_id or other.linked_note_id,
    )


def _flag_overlap(redundant: AnnotationRecord, keeper: AnnotationRecord) -> AnnotationRecord:
    return replace(
        redundant,
        quality=replace(
            redundant.quality,
            is_suspicious_highlight=True,
            suspicious_reason="overlapping",
            possible_duplicate_of=keeper.id,
        ),
    )


def merge_overlapping(records: list[AnnotationRecord], *, merge: bool = True) -> MergeOutcome:
    """Collapse overlapping highlights per book, or flag the shorter one.

    Only highlights with a known location take part; everything else passes
    through unchanged.
    """

    books: dict[str, list[AnnotationRecord]] = {}
    passthrough: list[AnnotationRecord] = []
    for record in records:
        if record.type == "highlight" and record.location.is_known and not record.quality.is_flagged:
            books.setdefault(book_key(record), []).append(record)
        else:
            passthrough.append(record)

    result: list[AnnotationRecord] = []
    merged = 0
    for highlights in books.values():
        ordered = sorted(highlights, key=lambda item: (item.location.start, item.block_index))
        current = ordered[0]
        for candidate in ordered[1:]:
            if not can_merge(current, candidate):
                result.append(current)
                current = candidate
                continue
            merged += 1
            if merge:
                current = merge_pair(current, candidate)
                continue
            if len(current.content) >= len(candidate.content):
                result.append(_flag_overlap(candidate, current))
            else:
                result.append(_flag_overlap(current, candidate))
                current = candidate
        result.append(current)

    if merged:
        logger.debug("Overlapping highlights %s: %d", "merged" if merge else "flagged", merged)
    result.extend(passthrough)
    result.sort(key=lambda item: item.block_index)
    return MergeOutcome(records=result, merged=merged)
