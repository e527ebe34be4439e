from __future__ import annotations

import pytest

from clipkit.parsing.diagnostics import WarningCollector


def test_collector_appends_single_terminal_marker() -> None:
    collector = WarningCollector(limit=3)
    for index in range(5):
        collector.add("unknown_format", f"bad block {index}", index)

    kinds = [warning.kind for warning in collector.warnings]
    assert kinds == ["unknown_format"] * 3 + ["warnings_truncated"]
    assert collector.warnings[-1].message == "Stopped after 3 warnings. File may be corrupted."
    assert collector.dropped == 2
    assert collector.truncated is True


def test_collector_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        WarningCollector(limit=0)
