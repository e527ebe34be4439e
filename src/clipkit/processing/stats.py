"""Aggregate statistics over a processed record list."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from clipkit.parsing.models import AnnotationRecord


@dataclass(slots=True)
class DateRange:
    earliest: datetime | None = None
    latest: datetime | None = None

    def include(self, value: datetime | None) -> None:
        if value is None:
            return
        if self.earliest is None or value < self.earliest:
            self.earliest = value
        if self.latest is None or value > self.latest:
            self.latest = value

    def to_dict(self) -> dict[str, str | None]:
        return {
            "earliest": self.earliest.isoformat() if self.earliest else None,
            "latest": self.latest.isoformat() if self.latest else None,
        }


@dataclass(slots=True)
class BookStats:
    title: str
    author: str
    highlights: int = 0
    notes: int = 0
    bookmarks: int = 0
    word_count: int = 0
    date_range: DateRange = field(default_factory=DateRange)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["date_range"] = self.date_range.to_dict()
        return payload


@dataclass(slots=True)
class ClippingsStats:
    """Totals for one run; the pipeline counters are filled in by the parser."""

    total: int = 0
    total_highlights: int = 0
    total_notes: int = 0
    total_bookmarks: int = 0
    total_clips: int = 0
    total_books: int = 0
    total_authors: int = 0
    books: list[BookStats] = field(default_factory=list)
    duplicates_removed: int = 0
    merged_highlights: int = 0
    linked_notes: int = 0
    notes_consumed: int = 0
    tags_extracted: int = 0
    filtered_out: int = 0
    suspicious_flagged: int = 0
    fuzzy_flagged: int = 0
    drm_limit_reached: int = 0
    date_range: DateRange = field(default_factory=DateRange)
    total_words: int = 0
    avg_words_per_highlight: int = 0
    avg_highlights_per_book: int = 0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["books"] = [book.to_dict() for book in self.books]
        payload["date_range"] = self.date_range.to_dict()
        return payload


def book_key(record: AnnotationRecord) -> str:
    return record.title.lower()


def group_by_book(records: list[AnnotationRecord]) -> dict[str, list[AnnotationRecord]]:
    groups: dict[str, list[AnnotationRecord]] = {}
    for record in records:
        groups.setdefault(book_key(record), []).append(record)
    return groups


def calculate_stats(records: list[AnnotationRecord]) -> ClippingsStats:
    stats = ClippingsStats(total=len(records))
    authors: set[str] = set()

    for book_records in group_by_book(records).values():
        first = book_records[0]
        book = BookStats(title=first.title, author=first.author)
        authors.add(first.author)
        for record in book_records:
            if record.type == "highlight":
                book.highlights += 1
            elif record.type == "note":
                book.notes += 1
            elif record.type == "bookmark":
                book.bookmarks += 1
            else:
                stats.total_clips += 1
            book.word_count += record.word_count
            book.date_range.include(record.date)
            stats.date_range.include(record.date)
            if record.is_limit_reached:
                stats.drm_limit_reached += 1

        stats.total_highlights += book.highlights
        stats.total_notes += book.notes
        stats.total_bookmarks += book.bookmarks
        stats.total_words += book.word_count
        stats.books.append(book)

    stats.books.sort(key=lambda item: item.highlights, reverse=True)
    stats.total_books = len(stats.books)
    stats.total_authors = len(authors)
    if stats.total_highlights:
        stats.avg_words_per_highlight = round(stats.total_words / stats.total_highlights)
    if stats.total_books:
        stats.avg_highlights_per_book = round(stats.total_highlights / stats.total_books)
    return stats
