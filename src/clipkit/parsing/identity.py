"""Deterministic identifiers for annotation records."""

from __future__ import annotations

import hashlib

from clipkit.parsing.normalization import normalize_key

ID_LENGTH = 12
CONTENT_PREFIX_LENGTH = 50
_DELIMITER = "|"


def _digest(parts: list[str]) -> str:
    return hashlib.sha256(_DELIMITER.join(parts).encode("utf-8")).hexdigest()


def generate_clipping_id(title: str, location: str, clipping_type: str, content: str = "") -> str:
    """Stable 12-character id, identical across re-imports of the same annotation."""

    prefix = normalize_key(content[:CONTENT_PREFIX_LENGTH])
    return _digest([normalize_key(title), location.strip(), clipping_type, prefix])[:ID_LENGTH]


def generate_duplicate_hash(title: str, location: str, content: str) -> str:
    """Full-content key used only to group exact duplicates."""

    return _digest([normalize_key(title), location.strip(), normalize_key(content)])
