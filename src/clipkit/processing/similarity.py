"""Word-set similarity used by merging and fuzzy-duplicate detection."""

from __future__ import annotations

import re

from razdel import tokenize

_WORD_CHAR_RE = re.compile(r"\w")


def word_set(text: str) -> frozenset[str]:
    """Case-folded word tokens of `text`, punctuation dropped."""

    return frozenset(
        token.text.casefold() for token in tokenize(text) if _WORD_CHAR_RE.search(token.text)
    )


def jaccard_similarity(left: str, right: str) -> float:
    left_words = word_set(left)
    right_words = word_set(right)
    union = left_words | right_words
    if not union:
        return 0.0
    return len(left_words & right_words) / len(union)
