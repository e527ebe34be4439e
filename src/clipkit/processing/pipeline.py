"""Post-parse processing pipeline over the flat record list."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import logging

from clipkit.parsing.models import AnnotationRecord
from clipkit.parsing.options import ParseOptions
from clipkit.processing.dedupe import resolve_duplicates
from clipkit.processing.filters import filter_records, filter_to_highlights_only
from clipkit.processing.linking import link_notes, remove_linked_notes
from clipkit.processing.merging import merge_overlapping
from clipkit.processing.quality import flag_fuzzy_duplicates, flag_suspicious_highlights
from clipkit.processing.tags import extract_tags_from_linked_notes

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProcessResult:
    records: list[AnnotationRecord] = field(default_factory=list)
    duplicates_removed: int = 0
    merged_highlights: int = 0
    linked_notes: int = 0
    notes_consumed: int = 0
    tags_extracted: int = 0
    filtered_out: int = 0
    suspicious_flagged: int = 0
    fuzzy_flagged: int = 0

    def counters(self) -> dict[str, int]:
        payload = asdict(self)
        payload.pop("records")
        return payload


def process(records: list[AnnotationRecord], options: ParseOptions | None = None) -> ProcessResult:
    """Run every processing stage in order and collect the stage counters.

    Each stage returns a new list; input records are never modified. The
    final list is ordered by original block position.
    """

    options = options or ParseOptions()
    result = ProcessResult()

    filtered = filter_records(list(records), options)
    current = filtered.records
    result.filtered_out = filtered.removed

    deduped = resolve_duplicates(current, remove=options.remove_duplicates)
    current = deduped.records
    result.duplicates_removed = deduped.duplicates

    merged = merge_overlapping(current, merge=options.merge_overlapping)
    current = merged.records
    result.merged_highlights = merged.merged

    if options.merge_notes:
        linked = link_notes(current)
        current = linked.records
        result.linked_notes = linked.linked

    if options.remove_linked_notes or options.remove_unlinked_notes:
        removal = remove_linked_notes(
            current,
            remove_linked=options.remove_linked_notes,
            remove_unlinked=options.remove_unlinked_notes,
        )
        current = removal.records
        result.notes_consumed = removal.removed

    if options.extract_tags:
        tagged = extract_tags_from_linked_notes(current, options.tag_case)
        current = tagged.records
        result.tags_extracted = tagged.extracted

    if options.highlights_only:
        highlights = filter_to_highlights_only(current)
        current = highlights.records
        result.filtered_out += highlights.removed

    suspicious = flag_suspicious_highlights(current)
    current = suspicious.records
    result.suspicious_flagged = suspicious.flagged

    fuzzy = flag_fuzzy_duplicates(current, threshold=options.similarity_threshold)
    current = fuzzy.records
    result.fuzzy_flagged = fuzzy.flagged

    result.records = sorted(current, key=lambda item: item.block_index)
    logger.info(
        "Processed %d records into %d (duplicates=%d merged=%d linked=%d flagged=%d fuzzy=%d)",
        len(records),
        len(result.records),
        result.duplicates_removed,
        result.merged_highlights,
        result.linked_notes,
        result.suspicious_flagged,
        result.fuzzy_flagged,
    )
    return result
