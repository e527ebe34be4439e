from __future__ import annotations

from clipkit.parsing.models import AnnotationRecord, Location
from clipkit.processing.tags import extract_tags_from_linked_notes, extract_tags_from_note, looks_like_tag_note


def test_hashtags_and_separators_become_tags() -> None:
    result = extract_tags_from_note("#philosophy, stoicism; Ethics", "uppercase")

    assert result.tags == ["PHILOSOPHY", "STOICISM", "ETHICS"]
    assert result.has_tags is True
    assert result.is_tag_only_note is True


def test_sentence_fragments_are_rejected() -> None:
    sentence = extract_tags_from_note("This is a great point about the war")
    mixed = extract_tags_from_note("history, this is what happens")

    assert sentence.tags == []
    assert sentence.has_tags is False
    assert mixed.tags == ["history"]
    assert mixed.is_tag_only_note is False


def test_tags_are_deduplicated_case_insensitively() -> None:
    result = extract_tags_from_note("Stoic, stoic, STOIC", "original")

    assert result.tags == ["Stoic"]


def test_invalid_candidates_are_dropped() -> None:
    result = extract_tags_from_note("x, 42things, @mentor!, " + "a" * 51)

    assert result.tags == ["mentor"]


def test_looks_like_tag_note() -> None:
    assert looks_like_tag_note("travel, food") is True
    assert looks_like_tag_note("single") is True
    assert looks_like_tag_note("") is False
    assert looks_like_tag_note("A long reflective note without any separators in it at all") is False


def test_linked_note_tags_are_added_to_existing_tags() -> None:
    highlight = AnnotationRecord(
        id="h1",
        title="War and Peace",
        title_raw="War and Peace",
        author="Leo Tolstoy",
        author_raw="Leo Tolstoy",
        content="The strongest of all warriors are these two: time and patience.",
        content_raw="",
        type="highlight",
        location=Location(raw="10", start=10),
        date_raw="",
        language="en",
        block_index=0,
        note="war, peace",
        tags=("WAR",),
    )

    outcome = extract_tags_from_linked_notes([highlight], "uppercase")

    assert outcome.records[0].tags == ("WAR", "PEACE")
    assert outcome.extracted == 1
