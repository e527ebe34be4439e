"""Validated options for parsing and processing a clippings export."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from clipkit.parsing.languages import Language
from clipkit.parsing.models import CLIPPING_TYPES

AUTO_LANGUAGE = "auto"
TAG_CASES = ("original", "uppercase", "lowercase")
DEFAULT_SIMILARITY_THRESHOLD = 0.8

_ENV_PREFIX = "CLIPKIT_"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Options recognized by `parse_string` and the processing pipeline."""

    language: str = AUTO_LANGUAGE
    remove_duplicates: bool = True
    merge_notes: bool = True
    remove_linked_notes: bool = False
    remove_unlinked_notes: bool = False
    extract_tags: bool = False
    tag_case: str = "uppercase"
    merge_overlapping: bool = True
    highlights_only: bool = False
    exclude_types: tuple[str, ...] = ()
    exclude_books: tuple[str, ...] = ()
    only_books: tuple[str, ...] = ()
    min_content_length: int = 0
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    normalize_unicode: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        for name in ("exclude_types", "exclude_books", "only_books"):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(item.strip() for item in value if item and item.strip()))

        language = self.language.strip().lower()
        if language != AUTO_LANGUAGE and language not in {item.value for item in Language}:
            raise ValueError(f"Unsupported language: {self.language!r}")
        object.__setattr__(self, "language", language)

        if self.tag_case not in TAG_CASES:
            raise ValueError(f"tag_case must be one of {', '.join(TAG_CASES)}")
        unknown_types = [item for item in self.exclude_types if item not in CLIPPING_TYPES]
        if unknown_types:
            raise ValueError(f"Unknown clipping types in exclude_types: {', '.join(unknown_types)}")
        if self.min_content_length < 0:
            raise ValueError("min_content_length must be non-negative")
        if not 0.0 < self.similarity_threshold <= 1.0:
            raise ValueError("similarity_threshold must be in (0.0, 1.0]")

    @property
    def forced_language(self) -> Language | None:
        if self.language == AUTO_LANGUAGE:
            return None
        return Language(self.language)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParseOptions":
        source: Mapping[str, str] = os.environ if environ is None else environ
        values: dict[str, object] = {}

        def raw(name: str) -> str | None:
            value = source.get(_ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        for field_name in (
            "remove_duplicates",
            "merge_notes",
            "remove_linked_notes",
            "remove_unlinked_notes",
            "extract_tags",
            "merge_overlapping",
            "highlights_only",
            "normalize_unicode",
            "strict",
        ):
            value = raw(field_name.upper())
            if value is not None:
                values[field_name] = _parse_bool(_ENV_PREFIX + field_name.upper(), value)

        for field_name in ("exclude_types", "exclude_books", "only_books"):
            value = raw(field_name.upper())
            if value is not None:
                values[field_name] = tuple(item.strip() for item in value.split(",") if item.strip())

        language = raw("LANGUAGE")
        if language is not None:
            values["language"] = language
        tag_case = raw("TAG_CASE")
        if tag_case is not None:
            values["tag_case"] = tag_case.lower()

        min_length = raw("MIN_CONTENT_LENGTH")
        if min_length is not None:
            try:
                values["min_content_length"] = int(min_length)
            except ValueError as exc:
                raise ValueError("CLIPKIT_MIN_CONTENT_LENGTH must be an integer") from exc

        threshold = raw("SIMILARITY_THRESHOLD")
        if threshold is not None:
            try:
                values["similarity_threshold"] = float(threshold)
            except ValueError as exc:
                raise ValueError("CLIPKIT_SIMILARITY_THRESHOLD must be a number") from exc

        return cls(**values)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")
