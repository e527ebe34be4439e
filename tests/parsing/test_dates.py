from __future__ import annotations

from datetime import datetime

from clipkit.parsing.dates import parse_localized_date
from clipkit.parsing.languages import Language


def test_english_twelve_hour_clock_is_converted() -> None:
    assert parse_localized_date("Monday, January 1, 2024 10:30:45 PM", Language.EN) == datetime(2024, 1, 1, 22, 30, 45)
    assert parse_localized_date("Monday, January 1, 2024 12:05:00 AM", Language.EN) == datetime(2024, 1, 1, 0, 5, 0)


def test_localized_month_names_are_resolved() -> None:
    assert parse_localized_date("lunes, 1 de enero de 2024 10:30:45", Language.ES) == datetime(2024, 1, 1, 10, 30, 45)
    assert parse_localized_date("Montag, 15. Januar 2024 08:05:09", Language.DE) == datetime(2024, 1, 15, 8, 5, 9)
    assert parse_localized_date("vendredi 1 mars 2024 10:30:45", Language.FR) == datetime(2024, 3, 1, 10, 30, 45)
    assert parse_localized_date("vrijdag 1 maart 2024 10:30:45", Language.NL) == datetime(2024, 3, 1, 10, 30, 45)


def test_generic_fallback_parses_iso_like_strings() -> None:
    assert parse_localized_date("2024-03-05 10:00:00", Language.EN) == datetime(2024, 3, 5, 10, 0, 0)


def test_unparseable_dates_return_none() -> None:
    assert parse_localized_date("", Language.EN) is None
    assert parse_localized_date("   ", Language.FR) is None
    assert parse_localized_date("not a date at all", Language.EN) is None
