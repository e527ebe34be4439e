"""Cleanup of PDF-style artifacts inside highlight text."""

from __future__ import annotations

from dataclasses import dataclass, field
import re

# word-\n suffix, letters only so list dashes and numeric ranges survive
_HYPHEN_BREAK_RE = re.compile(r"([^\W\d_]+)-[ \t]*\n\s*([^\W\d_]+)")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;:!?])")
_MULTIPLE_SPACES_RE = re.compile(r" {2,}")
_INVISIBLE_RE = re.compile("[\ufeff\u200b\u200c\u200d]")


@dataclass(slots=True)
class TextCleaningResult:
    text: str
    was_cleaned: bool
    applied_operations: list[str] = field(default_factory=list)


def clean_text(text: str) -> TextCleaningResult:
    """Apply de-hyphenation and spacing fixes, reporting which ones changed the text.

    Letter case is never touched: a lower-case start is a signal for the
    fragment check later in the pipeline.
    """

    result = text
    applied: list[str] = []
    steps = (
        ("dehyphenation", _HYPHEN_BREAK_RE, r"\1\2"),
        ("space_before_punctuation", _SPACE_BEFORE_PUNCT_RE, r"\1"),
        ("multiple_spaces", _MULTIPLE_SPACES_RE, " "),
        ("invisible_chars", _INVISIBLE_RE, ""),
    )
    for name, pattern, replacement in steps:
        updated = pattern.sub(replacement, result)
        if updated != result:
            result = updated
            applied.append(name)

    result = result.strip()
    return TextCleaningResult(text=result, was_cleaned=result != text.strip(), applied_operations=applied)
