from __future__ import annotations

from dataclasses import replace

import pytest

from clipkit.parsing.models import AnnotationRecord, ClippingType, Location
from clipkit.processing.quality import classify_highlight, flag_fuzzy_duplicates, flag_suspicious_highlights


def _record(
    content: str,
    block_index: int,
    start: int = 100,
    *,
    kind: ClippingType = "highlight",
    title: str = "Emma",
) -> AnnotationRecord:
    return AnnotationRecord(
        id=f"r{block_index}",
        title=title,
        title_raw=title,
        author="Jane Austen",
        author_raw="Jane Austen",
        content=content,
        content_raw=content,
        type=kind,
        location=Location(raw=str(start), start=start),
        date_raw="",
        language="en",
        block_index=block_index,
    )


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("abc", "too_short"),
        ("and then he left", "fragment"),
        ("élan vital matters", "fragment"),
        ("и тогда он ушёл", "incomplete"),
        ("ένα μικρό απόσπασμα", "incomplete"),
        ("He left the room", "incomplete"),
        ("He left the room.", None),
        ("“Quoted speech ends here”", None),
        ("x" * 10 + " lowercase and long enough to skip every check without punctuation at all", None),
    ],
)
def test_classify_highlight(content: str, expected: str | None) -> None:
    assert classify_highlight(content) == expected


def test_suspicious_flagging_only_touches_unflagged_highlights() -> None:
    note = _record("tiny", 0, kind="note")
    already = _record("dup", 1)
    already = replace(
        already,
        quality=replace(already.quality, is_suspicious_highlight=True, suspicious_reason="exact_duplicate"),
    )
    short = _record("ok", 2)

    outcome = flag_suspicious_highlights([note, already, short])

    assert outcome.flagged == 1
    assert outcome.records[0].quality.is_suspicious_highlight is False
    assert outcome.records[1].quality.suspicious_reason == "exact_duplicate"
    assert outcome.records[2].quality.suspicious_reason == "too_short"


def test_fuzzy_duplicate_threshold() -> None:
    first = _record("This is some content for fuzzy matching test", 0, 100)
    second = _record("This is some content for fuzzy matching text", 1, 110)

    loose = flag_fuzzy_duplicates([first, second], threshold=0.7)
    strict = flag_fuzzy_duplicates([first, second], threshold=0.95)

    assert loose.flagged == 1
    assert loose.records[1].quality.possible_duplicate_of == "r0"
    assert loose.records[1].quality.similarity_score == pytest.approx(7 / 9, abs=1e-4)
    assert loose.records[0].quality.possible_duplicate_of is None
    assert strict.flagged == 0


def test_fuzzy_scan_stops_outside_proximity_window() -> None:
    words = "one two three four five six seven eight nine"
    source = _record(words + " ten", 0, 100)
    inside = _record(words + " eleven", 1, 150)
    outside = _record(words + " twelve", 2, 151)

    assert flag_fuzzy_duplicates([source, inside], threshold=0.8).flagged == 1
    assert flag_fuzzy_duplicates([source, outside], threshold=0.8).flagged == 0


def test_identical_text_far_apart_is_not_flagged() -> None:
    text = "It is a truth universally acknowledged"
    first = _record(text, 0, 100)
    second = _record(text, 1, 400)
    near = _record(text, 2, 105)

    assert flag_fuzzy_duplicates([first, second]).flagged == 0
    assert flag_fuzzy_duplicates([first, near]).flagged == 0


def test_flagged_records_are_not_reused_as_sources() -> None:
    base = "alpha beta gamma delta epsilon zeta eta theta"
    first = _record(base + " iota", 0, 100)
    second = _record(base + " kappa", 1, 105)
    third = _record(base + " lambda", 2, 110)

    outcome = flag_fuzzy_duplicates([first, second, third], threshold=0.8)

    assert outcome.flagged == 2
    assert outcome.records[1].quality.possible_duplicate_of == "r0"
    assert outcome.records[2].quality.possible_duplicate_of == "r0"


def test_fuzzy_comparison_is_per_book() -> None:
    first = _record("This is some content for fuzzy matching test", 0, 100)
    other_book = _record("This is some content for fuzzy matching text", 1, 101, title="Persuasion")

    assert flag_fuzzy_duplicates([first, other_book], threshold=0.7).flagged == 0


def test_suspicious_highlights_are_still_compared_for_fuzzy_duplicates() -> None:
    first = _record("This is some content for fuzzy matching test", 0, 100)
    second = _record("This is some content for fuzzy matching text", 1, 130)
    suspicious = flag_suspicious_highlights([first, second])

    outcome = flag_fuzzy_duplicates(suspicious.records, threshold=0.7)

    assert suspicious.flagged == 2
    assert outcome.flagged == 1
    assert outcome.records[1].quality.suspicious_reason == "incomplete"
    assert outcome.records[1].quality.possible_duplicate_of == "r0"


def test_records_already_pointing_at_a_duplicate_are_skipped() -> None:
    first = _record("This is some content for fuzzy matching test", 0, 100)
    second = _record("This is some content for fuzzy matching text", 1, 110)
    first = replace(first, quality=replace(first.quality, possible_duplicate_of="r9"))

    assert flag_fuzzy_duplicates([first, second], threshold=0.7).flagged == 0
