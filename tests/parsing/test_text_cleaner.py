from __future__ import annotations

from clipkit.parsing.text_cleaner import clean_text


def test_clean_text_fixes_pdf_artifacts() -> None:
    result = clean_text("extra-\nordinary word .  Done")

    assert result.text == "extraordinary word. Done"
    assert result.was_cleaned is True
    assert result.applied_operations == ["dehyphenation", "space_before_punctuation", "multiple_spaces"]


def test_clean_text_keeps_case_and_number_ranges() -> None:
    result = clean_text("pages 10-\n12 stay apart")

    assert result.text == "pages 10-\n12 stay apart"
    assert result.was_cleaned is False
    assert result.applied_operations == []


def test_clean_text_removes_invisible_characters() -> None:
    result = clean_text("zero\u200bwidth")

    assert result.text == "zerowidth"
    assert result.applied_operations == ["invisible_chars"]
