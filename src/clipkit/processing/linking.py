"""Attach notes to the highlights they annotate."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from clipkit.parsing.models import AnnotationRecord
from clipkit.processing.stats import book_key

logger = logging.getLogger(__name__)

MAX_NOTE_DISTANCE = 10


@dataclass(frozen=True, slots=True)
class LinkOutcome:
    records: list[AnnotationRecord]
    linked: int


@dataclass(frozen=True, slots=True)
class RemovalOutcome:
    records: list[AnnotationRecord]
    removed: int


def _best_highlight(note_start: int, candidates: list[tuple[int, AnnotationRecord]]) -> int | None:
    covering = [
        (abs(record.location.start - note_start), position)
        for position, record in candidates
        if record.location.start <= note_start <= record.location.last
    ]
    if covering:
        return min(covering)[1]

    nearby = [
        (abs(record.location.start - note_start), position)
        for position, record in candidates
        if abs(record.location.start - note_start) <= MAX_NOTE_DISTANCE
    ]
    if nearby:
        return min(nearby)[1]
    return None


def link_notes(records: list[AnnotationRecord]) -> LinkOutcome:
    """Link each note to a highlight of the same book.

    A highlight whose range covers the note location wins, closest start
    first. Otherwise the nearest highlight start within ten locations is used.
    Notes without a location are left alone. A highlight receiving several
    notes keeps the first note id and the note texts joined by newlines.
    """

    output = list(records)
    by_book: dict[str, list[tuple[int, AnnotationRecord]]] = {}
    for position, record in enumerate(records):
        if record.type == "highlight" and record.location.is_known and not record.quality.is_flagged:
            by_book.setdefault(book_key(record), []).append((position, record))

    linked = 0
    for position, note in enumerate(records):
        if note.type != "note" or not note.location.start:
            continue
        candidates = by_book.get(book_key(note))
        if not candidates:
            continue
        target = _best_highlight(note.location.start, candidates)
        if target is None:
            continue

        highlight = output[target]
        note_text = "\n".join(text for text in (highlight.note, note.content) if text) or None
        output[target] = replace(
            highlight,
            note=note_text,
            linked_note_id=highlight.linked_note_id or note.id,
        )
        output[position] = replace(note, linked_highlight_id=highlight.id)
        linked += 1

    logger.debug("Linked %d notes to highlights", linked)
    return LinkOutcome(records=output, linked=linked)


def remove_linked_notes(
    records: list[AnnotationRecord],
    *,
    remove_linked: bool = True,
    remove_unlinked: bool = False,
) -> RemovalOutcome:
    """Drop notes already embedded in a highlight, optionally also orphan notes."""

    kept: list[AnnotationRecord] = []
    for record in records:
        if record.type == "note":
            if record.linked_highlight_id and remove_linked:
                continue
            if not record.linked_highlight_id and remove_unlinked:
                continue
        kept.append(record)
    return RemovalOutcome(records=kept, removed=len(records) - len(kept))
