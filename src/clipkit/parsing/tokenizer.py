"""Split a clippings export into raw title/metadata/content blocks."""

from __future__ import annotations

import logging
import re

from clipkit.parsing.models import RawBlock
from clipkit.parsing.normalization import normalize_line_endings, strip_bom

logger = logging.getLogger(__name__)

SEPARATOR_RE = re.compile(r"={10,}")
MIN_BLOCK_LINES = 2


def tokenize(content: str) -> list[RawBlock]:
    """Return the usable blocks of `content` in file order.

    Each block keeps its position in the original split, so indexes have gaps
    where empty or too-short fragments were dropped. Never raises.
    """

    if not content:
        return []

    cleaned = normalize_line_endings(strip_bom(content))
    blocks: list[RawBlock] = []
    for index, fragment in enumerate(SEPARATOR_RE.split(cleaned)):
        trimmed = fragment.strip()
        if not trimmed:
            continue
        lines = [line.strip() for line in trimmed.split("\n")]
        if sum(1 for line in lines if line) < MIN_BLOCK_LINES:
            logger.debug("Skipping fragment %d with fewer than %d lines", index, MIN_BLOCK_LINES)
            continue
        blocks.append(RawBlock(index=index, raw_text=trimmed, lines=lines))
    return blocks
