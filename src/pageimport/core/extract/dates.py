"""Heuristic publish-date detection in free text"""

import re
from datetime import datetime
from typing import Iterable, Optional

import dateparser


MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"
WEEKDAYS = "Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"

DATE_RE = re.compile(
    rf'(?:{WEEKDAYS})?\s*'
    rf'(\d{{1,2}}(?:st|nd|rd|th)?\s+(?:{MONTHS})\s+\d{{4}}'
    r'(?:\s+\d{1,2}:\d{2}\s*(?:AM|PM)?)?)',
    re.IGNORECASE,
)
ORDINAL_RE = re.compile(r'(\d+)(st|nd|rd|th)\b', re.IGNORECASE)

PARSER_SETTINGS = {
    'PREFER_DAY_OF_MONTH': 'first',
    'DATE_ORDER': 'DMY',
    'RETURN_AS_TIMEZONE_AWARE': False,
}


def date_text(text: str) -> str:
    """Return the date-looking span of text (or all of it) with ordinal suffixes removed."""
    m = DATE_RE.search(text)
    candidate = m.group(1) if m else text
    return ORDINAL_RE.sub(r'\1', candidate).strip()


def normalize_date(text: str) -> Optional[datetime]:
    """Parse a human-readable date buried in text; None when nothing parses.

    'Posted on Tuesday 15th August 2023 9:58 AM by admin' -> 2023-08-15 09:58
    """
    if not text or not text.strip():
        return None
    try:
        parsed = dateparser.parse(date_text(text), languages=['en'], settings=PARSER_SETTINGS)
    except (ValueError, OverflowError):
        return None
    if parsed is None:
        return None
    return parsed.replace(tzinfo=None)


def first_date(candidates: Iterable[str]) -> Optional[tuple[str, datetime]]:
    """Return (text, date) for the first candidate that parses; stops consuming at the first hit."""
    for text in candidates:
        parsed = normalize_date(text)
        if parsed is not None:
            return text, parsed
    return None
