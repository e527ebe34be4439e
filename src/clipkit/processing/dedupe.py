"""Exact-duplicate resolution keyed by the full-content duplicate hash."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from clipkit.parsing.identity import generate_duplicate_hash
from clipkit.parsing.models import AnnotationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DedupeOutcome:
    records: list[AnnotationRecord]
    duplicates: int


def duplicate_key(record: AnnotationRecord) -> str:
    return generate_duplicate_hash(record.title, record.location.raw, record.content)


def merge_tags(target: AnnotationRecord, source: AnnotationRecord) -> AnnotationRecord:
    """Append tags of `source` missing from `target`, keeping target order."""

    missing = tuple(tag for tag in source.tags if tag not in target.tags)
    if not missing:
        return target
    return replace(target, tags=target.tags + missing)


def resolve_duplicates(records: list[AnnotationRecord], *, remove: bool = True) -> DedupeOutcome:
    """Collapse or flag records sharing a duplicate hash.

    The last record of a group is the survivor; it is assumed to be the user's
    latest correction. In remove mode the earlier ones are dropped and their
    tags merged into the survivor. In flag mode they are kept and marked as
    `exact_duplicate` pointing at the survivor.
    """

    groups: dict[str, list[int]] = {}
    for position, record in enumerate(records):
        groups.setdefault(duplicate_key(record), []).append(position)

    output: list[AnnotationRecord | None] = list(records)
    duplicates = 0
    for positions in groups.values():
        if len(positions) < 2:
            continue
        *earlier, last = positions
        duplicates += len(earlier)
        if remove:
            survivor = records[earlier[0]]
            for position in earlier[1:] + [last]:
                survivor = merge_tags(records[position], survivor)
            output[last] = survivor
            for position in earlier:
                output[position] = None
        else:
            survivor_id = records[last].id
            for position in earlier:
                output[position] = replace(
                    records[position],
                    quality=replace(
                        records[position].quality,
                        is_suspicious_highlight=True,
                        suspicious_reason="exact_duplicate",
                        possible_duplicate_of=survivor_id,
                    ),
                )

    result = sorted((record for record in output if record is not None), key=lambda item: item.block_index)
    if duplicates:
        logger.debug("Exact duplicates %s: %d", "removed" if remove else "flagged", duplicates)
    return DedupeOutcome(records=result, duplicates=duplicates)
