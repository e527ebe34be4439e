"""Canonical data structures shared by the parser and processing stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal

ClippingType = Literal["highlight", "note", "bookmark", "clip", "article"]
ClippingSource = Literal["kindle", "sideload"]
SuspiciousReason = Literal["too_short", "fragment", "incomplete", "exact_duplicate", "overlapping"]

CLIPPING_TYPES: tuple[str, ...] = ("highlight", "note", "bookmark", "clip", "article")


@dataclass(slots=True)
class RawBlock:
    """One separator-delimited fragment of the clippings export."""

    index: int
    raw_text: str
    lines: list[str]


@dataclass(frozen=True, slots=True)
class Location:
    """Location reference inside a book, single point or closed range."""

    raw: str = ""
    start: int = 0
    end: int | None = None

    @property
    def is_known(self) -> bool:
        return bool(self.raw)

    @property
    def last(self) -> int:
        """Closing bound of the range, or the start for a single point."""

        return self.end if self.end is not None else self.start


@dataclass(frozen=True, slots=True)
class QualityFlags:
    """Post-hoc annotations attached by the processing pipeline."""

    is_suspicious_highlight: bool = False
    suspicious_reason: SuspiciousReason | None = None
    similarity_score: float | None = None
    possible_duplicate_of: str | None = None
    title_was_cleaned: bool = False
    content_was_cleaned: bool = False

    @property
    def is_flagged(self) -> bool:
        return self.is_suspicious_highlight or self.possible_duplicate_of is not None


@dataclass(frozen=True, slots=True)
class AnnotationRecord:
    """A single highlight, note, bookmark, clip or article from one block."""

    id: str
    title: str
    title_raw: str
    author: str
    author_raw: str
    content: str
    content_raw: str
    type: ClippingType
    location: Location
    date_raw: str
    language: str
    block_index: int
    page: int | None = None
    date: datetime | None = None
    is_limit_reached: bool = False
    is_empty: bool = False
    source: ClippingSource = "kindle"
    word_count: int = 0
    char_count: int = 0
    linked_note_id: str | None = None
    linked_highlight_id: str | None = None
    note: str | None = None
    tags: tuple[str, ...] = ()
    quality: QualityFlags = field(default_factory=QualityFlags)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["date"] = self.date.isoformat() if self.date else None
        payload["tags"] = list(self.tags)
        return payload


@dataclass(frozen=True, slots=True)
class ParseWarning:
    """Structural diagnostic emitted while parsing a block."""

    kind: str
    message: str
    block_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "block_index": self.block_index}
