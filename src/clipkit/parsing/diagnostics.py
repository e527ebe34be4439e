"""Bounded warning collection scoped to one parse invocation."""

from __future__ import annotations

from clipkit.parsing.models import ParseWarning

MAX_WARNINGS = 100
TRUNCATED_KIND = "warnings_truncated"


class WarningCollector:
    """Collect parse warnings up to a fixed cap.

    After the cap is reached one terminal marker is appended and further
    warnings are counted but not stored.
    """

    def __init__(self, limit: int = MAX_WARNINGS) -> None:
        if limit < 1:
            raise ValueError("Warning limit must be positive")
        self._limit = limit
        self._warnings: list[ParseWarning] = []
        self._dropped = 0

    @property
    def warnings(self) -> list[ParseWarning]:
        return list(self._warnings)

    @property
    def dropped(self) -> int:
        return self._dropped

    @property
    def truncated(self) -> bool:
        return self._dropped > 0

    def add(self, kind: str, message: str, block_index: int | None = None) -> None:
        if len(self._warnings) < self._limit:
            self._warnings.append(ParseWarning(kind=kind, message=message, block_index=block_index))
            return
        if self._dropped == 0:
            self._warnings.append(
                ParseWarning(
                    kind=TRUNCATED_KIND,
                    message=f"Stopped after {self._limit} warnings. File may be corrupted.",
                )
            )
        self._dropped += 1
