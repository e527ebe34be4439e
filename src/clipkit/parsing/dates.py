"""Localized date parsing for clippings metadata lines."""

from __future__ import annotations

from datetime import datetime
import logging

import dateparser
from dateutil.parser import parse as parse_date

from clipkit.parsing.languages import LANGUAGE_PATTERNS, Language

logger = logging.getLogger(__name__)

_DATEPARSER_SETTINGS = {"RETURN_AS_TIMEZONE_AWARE": False}


def parse_localized_date(raw: str, language: Language) -> datetime | None:
    """Parse a raw clippings date using the language's ordered format list.

    The localized formats are handed to dateparser together with the
    language, so month and weekday names resolve through its locale data.
    A generic dateutil parse of the whole string is the last resort.
    Returns None when nothing produces a valid date; this is a missing
    value, not an error.
    """

    cleaned = raw.strip()
    if not cleaned:
        return None

    parsed = dateparser.parse(
        cleaned,
        date_formats=list(LANGUAGE_PATTERNS[language].date_formats),
        languages=[language.value],
        settings=_DATEPARSER_SETTINGS,
    )
    if parsed is not None:
        return parsed

    try:
        return parse_date(cleaned)
    except (ValueError, OverflowError):
        logger.debug("No date format matched %r for %s", cleaned, language.value)
        return None
