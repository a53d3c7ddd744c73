"""Unit tests for core/extract/dates.py"""

from datetime import datetime

import pytest

from pageimport.core.extract.dates import date_text, first_date, normalize_date


@pytest.mark.parametrize("text,expected", [
    ("Tuesday 15th August 2023 9:58 AM", "15 August 2023 9:58 AM"),
    ("Posted 1st March 2021 by someone", "1 March 2021"),
    ("22nd june 2020", "22 june 2020"),
    ("2023-08-15", "2023-08-15"),
])
def test_date_text(text, expected):
    """The matched span is used when present and ordinal suffixes are removed."""
    assert date_text(text) == expected


def test_normalize_date_full_expression():
    parsed = normalize_date("Tuesday 15th August 2023 9:58 AM")
    assert parsed.date() == datetime(2023, 8, 15).date()
    assert (parsed.hour, parsed.minute) == (9, 58)


def test_normalize_date_embedded_in_words():
    parsed = normalize_date("Last updated on 3rd January 2022 by the web team")
    assert parsed.date() == datetime(2022, 1, 3).date()


def test_normalize_date_is_naive():
    assert normalize_date("11th August 2023").tzinfo is None


def test_normalize_date_month_year_does_not_raise():
    """A date without a day either parses to that month or reports no date."""
    parsed = normalize_date("August 2023")
    assert parsed is None or (parsed.year, parsed.month) == (2023, 8)


@pytest.mark.parametrize("text", ["", "   ", "Share this page"])
def test_normalize_date_no_date(text):
    assert normalize_date(text) is None


def test_first_date_stops_at_first_hit():
    """Candidates after the first parseable one are never consumed."""
    seen = []

    def candidates():
        for text in ["Menu", "Share this page", "11th August 2023", "1st May 2020"]:
            seen.append(text)
            yield text

    text, parsed = first_date(candidates())
    assert text == "11th August 2023"
    assert parsed.date() == datetime(2023, 8, 11).date()
    assert seen == ["Menu", "Share this page", "11th August 2023"]


def test_first_date_none():
    assert first_date(["Menu", "Share this page"]) is None
