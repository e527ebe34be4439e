from __future__ import annotations

from clipkit.parsing.models import AnnotationRecord, ClippingType, Location
from clipkit.processing.linking import link_notes, remove_linked_notes


def _record(
    kind: ClippingType,
    record_id: str,
    block_index: int,
    start: int,
    end: int | None = None,
    *,
    content: str = "",
    title: str = "Middlemarch",
) -> AnnotationRecord:
    raw = "" if start == 0 else (f"{start}-{end}" if end else str(start))
    return AnnotationRecord(
        id=record_id,
        title=title,
        title_raw=title,
        author="George Eliot",
        author_raw="George Eliot",
        content=content or f"{kind} text {record_id}",
        content_raw=content,
        type=kind,
        location=Location(raw=raw, start=start, end=end),
        date_raw="",
        language="en",
        block_index=block_index,
    )


def test_note_inside_highlight_range_is_linked() -> None:
    highlight = _record("highlight", "h1", 0, 100, 105)
    note = _record("note", "n1", 1, 103, content="remember this")

    outcome = link_notes([highlight, note])

    linked_highlight, linked_note = outcome.records
    assert outcome.linked == 1
    assert linked_highlight.note == "remember this"
    assert linked_highlight.linked_note_id == "n1"
    assert linked_note.linked_highlight_id == "h1"
    assert highlight.note is None


def test_range_match_wins_over_closer_proximity_match() -> None:
    covering = _record("highlight", "h-range", 0, 90, 110)
    nearby = _record("highlight", "h-near", 1, 111)
    note = _record("note", "n1", 2, 109)

    outcome = link_notes([covering, nearby, note])

    assert outcome.records[2].linked_highlight_id == "h-range"
    assert outcome.records[1].note is None


def test_proximity_fallback_is_bounded() -> None:
    highlight = _record("highlight", "h1", 0, 100)
    close_note = _record("note", "n-close", 1, 108)
    far_note = _record("note", "n-far", 2, 120)

    outcome = link_notes([highlight, close_note, far_note])

    assert outcome.linked == 1
    assert outcome.records[1].linked_highlight_id == "h1"
    assert outcome.records[2].linked_highlight_id is None


def test_notes_from_other_books_or_without_location_stay_unlinked() -> None:
    highlight = _record("highlight", "h1", 0, 100, 105)
    other_book = _record("note", "n-other", 1, 102, title="Silas Marner")
    no_location = _record("note", "n-zero", 2, 0)

    outcome = link_notes([highlight, other_book, no_location])

    assert outcome.linked == 0
    assert outcome.records[0].note is None


def test_multiple_notes_on_one_highlight_are_concatenated() -> None:
    highlight = _record("highlight", "h1", 0, 100, 110)
    first = _record("note", "n1", 1, 101, content="first thought")
    second = _record("note", "n2", 2, 107, content="second thought")

    outcome = link_notes([highlight, first, second])

    assert outcome.linked == 2
    assert outcome.records[0].note == "first thought\nsecond thought"
    assert outcome.records[0].linked_note_id == "n1"


def test_remove_linked_notes_respects_flags() -> None:
    highlight = _record("highlight", "h1", 0, 100, 105)
    linked = _record("note", "n1", 1, 103)
    orphan = _record("note", "n2", 2, 400)
    records = link_notes([highlight, linked, orphan]).records

    only_linked = remove_linked_notes(records)
    both = remove_linked_notes(records, remove_linked=True, remove_unlinked=True)

    assert [record.id for record in only_linked.records] == ["h1", "n2"]
    assert only_linked.removed == 1
    assert [record.id for record in both.records] == ["h1"]
    assert both.removed == 2
