"""Suspicious-highlight and fuzzy-duplicate flagging."""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import re

from clipkit.parsing.models import AnnotationRecord, SuspiciousReason
from clipkit.parsing.options import DEFAULT_SIMILARITY_THRESHOLD
from clipkit.processing.stats import book_key
from clipkit.processing.similarity import jaccard_similarity

logger = logging.getLogger(__name__)

GARBAGE_LENGTH = 5
SHORT_LENGTH = 75
PROXIMITY_WINDOW = 50

_VALID_ENDING_RE = re.compile(r"[.!?\"”’')\]»…。！？」』]$")
# Latin letters and the common Western European diacritics only
_LOWERCASE_START_RE = re.compile(r"[a-záéíóúñüàèìòùâêîôûäëïöç]")


@dataclass(frozen=True, slots=True)
class FlagOutcome:
    records: list[AnnotationRecord]
    flagged: int


def classify_highlight(content: str) -> SuspiciousReason | None:
    """Return why a highlight looks accidental, or None for plausible text."""

    text = content.strip()
    if len(text) < GARBAGE_LENGTH:
        return "too_short"
    if len(text) >= SHORT_LENGTH:
        return None
    if _LOWERCASE_START_RE.match(text):
        return "fragment"
    if not _VALID_ENDING_RE.search(text):
        return "incomplete"
    return None


def flag_suspicious_highlights(records: list[AnnotationRecord]) -> FlagOutcome:
    output: list[AnnotationRecord] = []
    flagged = 0
    for record in records:
        if record.type != "highlight" or record.quality.is_suspicious_highlight:
            output.append(record)
            continue
        reason = classify_highlight(record.content)
        if reason is None:
            output.append(record)
            continue
        flagged += 1
        output.append(
            replace(
                record,
                quality=replace(record.quality, is_suspicious_highlight=True, suspicious_reason=reason),
            )
        )
    return FlagOutcome(records=output, flagged=flagged)


def flag_fuzzy_duplicates(
    records: list[AnnotationRecord],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    window: int = PROXIMITY_WINDOW,
) -> FlagOutcome:
    """Flag near-identical highlights that sit close together in one book.

    Candidates are scanned forward by location and the scan stops once a
    candidate starts more than `window` locations after the current end.
    Identical word sets (score 1.0) are left to exact-duplicate resolution.
    Suspicious-highlight flags do not exclude a record; only records that
    already point at a duplicate are skipped.
    """

    output = list(records)
    by_book: dict[str, list[int]] = {}
    for position, record in enumerate(records):
        if record.type == "highlight" and record.location.is_known:
            by_book.setdefault(book_key(record), []).append(position)

    flagged = 0
    for positions in by_book.values():
        ordered = sorted(positions, key=lambda pos: (records[pos].location.start, records[pos].block_index))
        done = {pos for pos in ordered if records[pos].quality.possible_duplicate_of}
        for offset, source_pos in enumerate(ordered):
            if source_pos in done:
                continue
            source = records[source_pos]
            for candidate_pos in ordered[offset + 1 :]:
                candidate = records[candidate_pos]
                if candidate.location.start - source.location.last > window:
                    break
                if candidate_pos in done:
                    continue
                score = jaccard_similarity(source.content, candidate.content)
                if threshold <= score < 1.0:
                    output[candidate_pos] = replace(
                        candidate,
                        quality=replace(
                            candidate.quality,
                            similarity_score=round(score, 4),
                            possible_duplicate_of=source.id,
                        ),
                    )
                    done.add(candidate_pos)
                    flagged += 1

    if flagged:
        logger.debug("Fuzzy duplicates flagged: %d", flagged)
    return FlagOutcome(records=output, flagged=flagged)
