"""Parse a clippings export into processed annotation records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import time
from typing import Any

from clipkit.parsing.diagnostics import WarningCollector
from clipkit.parsing.metadata import detect_language, parse_block
from clipkit.parsing.models import AnnotationRecord, ParseWarning
from clipkit.parsing.normalization import normalize_input
from clipkit.parsing.options import ParseOptions
from clipkit.parsing.tokenizer import tokenize
from clipkit.processing.pipeline import process
from clipkit.processing.stats import ClippingsStats, calculate_stats

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParseMeta:
    file_size: int = 0
    parse_time_ms: float = 0.0
    detected_language: str = "en"
    total_blocks: int = 0
    parsed_blocks: int = 0


@dataclass(slots=True)
class ParseResult:
    """Best-effort records plus every warning produced along the way."""

    records: list[AnnotationRecord] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)
    stats: ClippingsStats = field(default_factory=ClippingsStats)
    meta: ParseMeta = field(default_factory=ParseMeta)

    def to_dict(self) -> dict[str, Any]:
        return {
            "records": [record.to_dict() for record in self.records],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "stats": self.stats.to_dict(),
            "meta": {
                "file_size": self.meta.file_size,
                "parse_time_ms": self.meta.parse_time_ms,
                "detected_language": self.meta.detected_language,
                "total_blocks": self.meta.total_blocks,
                "parsed_blocks": self.meta.parsed_blocks,
            },
        }


def parse_string(content: str, options: ParseOptions | None = None) -> ParseResult:
    """Tokenize, parse and process a whole export; never raises on bad input."""

    options = options or ParseOptions()
    started = time.perf_counter()
    text = normalize_input(content, unicode_form="NFC" if options.normalize_unicode else None)

    blocks = tokenize(text)
    warnings = WarningCollector()
    language = options.forced_language

    parsed: list[AnnotationRecord] = []
    for block in blocks:
        record = parse_block(block, warnings, language)
        if record is not None:
            parsed.append(record)

    processed = process(parsed, options)
    stats = calculate_stats(processed.records)
    stats = replace(stats, **processed.counters())

    meta = ParseMeta(
        file_size=len(content.encode("utf-8", errors="replace")),
        parse_time_ms=round((time.perf_counter() - started) * 1000, 3),
        detected_language=(language or detect_language(blocks)).value,
        total_blocks=len(blocks),
        parsed_blocks=len(parsed),
    )
    logger.info(
        "Parsed %d blocks into %d records (language=%s, warnings=%d)",
        meta.total_blocks,
        len(processed.records),
        meta.detected_language,
        len(warnings.warnings),
    )
    return ParseResult(records=processed.records, warnings=warnings.warnings, stats=stats, meta=meta)
