"""Option-driven record filters."""

from __future__ import annotations

from dataclasses import dataclass

from clipkit.parsing.models import AnnotationRecord
from clipkit.parsing.options import ParseOptions


@dataclass(frozen=True, slots=True)
class FilterOutcome:
    records: list[AnnotationRecord]
    removed: int


def _title_matches(title: str, needles: tuple[str, ...]) -> bool:
    lowered = title.lower()
    return any(needle.lower() in lowered for needle in needles)


def keep_record(record: AnnotationRecord, options: ParseOptions) -> bool:
    if record.type in options.exclude_types:
        return False
    if (
        options.min_content_length
        and record.type != "bookmark"
        and len(record.content) < options.min_content_length
    ):
        return False
    if options.exclude_books and _title_matches(record.title, options.exclude_books):
        return False
    if options.only_books and not _title_matches(record.title, options.only_books):
        return False
    return True


def filter_records(records: list[AnnotationRecord], options: ParseOptions) -> FilterOutcome:
    kept = [record for record in records if keep_record(record, options)]
    return FilterOutcome(records=kept, removed=len(records) - len(kept))


def filter_to_highlights_only(records: list[AnnotationRecord]) -> FilterOutcome:
    kept = [record for record in records if record.type == "highlight"]
    return FilterOutcome(records=kept, removed=len(records) - len(kept))
