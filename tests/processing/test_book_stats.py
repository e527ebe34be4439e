from __future__ import annotations

from datetime import datetime

from clipkit.parsing.models import AnnotationRecord, ClippingType, Location
from clipkit.processing.stats import calculate_stats, group_by_book


def _record(
    title: str,
    kind: ClippingType,
    block_index: int,
    *,
    words: int = 0,
    date: datetime | None = None,
    author: str = "Anon",
    limited: bool = False,
) -> AnnotationRecord:
    content = " ".join(["word"] * words)
    return AnnotationRecord(
        id=f"r{block_index}",
        title=title,
        title_raw=title,
        author=author,
        author_raw=author,
        content=content,
        content_raw=content,
        type=kind,
        location=Location(raw=str(block_index), start=block_index),
        date_raw="",
        language="en",
        block_index=block_index,
        date=date,
        word_count=words,
        is_limit_reached=limited,
    )


def test_group_by_book_is_case_insensitive_and_ordered() -> None:
    records = [_record("Emma", "highlight", 0), _record("Dune", "note", 1), _record("EMMA", "bookmark", 2)]

    groups = group_by_book(records)

    assert list(groups) == ["emma", "dune"]
    assert [record.block_index for record in groups["emma"]] == [0, 2]


def test_calculate_stats_totals_and_ordering() -> None:
    records = [
        _record("Dune", "highlight", 0, words=4, date=datetime(2024, 2, 1), author="Frank Herbert"),
        _record("Emma", "highlight", 1, words=6, date=datetime(2024, 1, 1), author="Jane Austen"),
        _record("Emma", "highlight", 2, words=2, author="Jane Austen"),
        _record("Emma", "note", 3, words=3, date=datetime(2024, 3, 1), author="Jane Austen"),
        _record("Clips", "clip", 4, words=1, limited=True),
        _record("Clips", "article", 5),
    ]

    stats = calculate_stats(records)

    assert stats.total == 6
    assert stats.total_highlights == 3
    assert stats.total_notes == 1
    assert stats.total_clips == 2
    assert stats.total_books == 3
    assert stats.total_authors == 3
    assert stats.drm_limit_reached == 1
    assert stats.total_words == 16
    assert stats.avg_words_per_highlight == 5
    assert stats.avg_highlights_per_book == 1
    assert [book.title for book in stats.books] == ["Emma", "Dune", "Clips"]
    emma = stats.books[0]
    assert (emma.highlights, emma.notes, emma.word_count) == (2, 1, 11)
    assert emma.date_range.earliest == datetime(2024, 1, 1)
    assert emma.date_range.latest == datetime(2024, 3, 1)
    assert stats.date_range.earliest == datetime(2024, 1, 1)


def test_calculate_stats_on_empty_list() -> None:
    stats = calculate_stats([])

    assert stats.total == 0
    assert stats.books == []
    assert stats.avg_words_per_highlight == 0
    assert stats.to_dict()["date_range"] == {"earliest": None, "latest": None}
