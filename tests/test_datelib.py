import datetime

import pytest

from marc_indexer.helpers.datelib import FixedDates, fixed_dates, parse_timestamp, year_range


def test_fixed_dates():
    assert fixed_dates("130827s2010    nyu           000 1 eng d") == FixedDates("s", "2010", "    ")
    assert fixed_dates("too short") is None
    assert fixed_dates(None) is None


@pytest.mark.parametrize("date1,date2,expected", [
    ("2010", None, (2010, 2010)),
    ("19uu", None, (1900, 1999)),
    ("1950", "1959", (1950, 1959)),
    ("195u", "196u", (1950, 1969)),
    ("1990", "9999", (1990, None)),
    ("    ", None, (None, None)),
    ("abcd", None, (None, None)),
    ("uuuu", None, (None, None)),
    ("uuuu", "1990", (None, None)),
    ("2000", "1990", (None, None)),
])
def test_year_range(date1, date2, expected):
    assert year_range(date1, date2) == expected


def test_parse_timestamp():
    formats = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d")
    assert parse_timestamp("2023-06-28", formats) == datetime.datetime(2023, 6, 28)
    assert parse_timestamp("2023-06-29 11:04:30", formats) == datetime.datetime(2023, 6, 29, 11, 4, 30)
    # trailing hundredths of a second are ignored
    assert parse_timestamp("2023-06-29 11:04:30:10", formats) == datetime.datetime(2023, 6, 29, 11, 4, 30)


def test_parse_timestamp_fails_on_garbage():
    with pytest.raises(ValueError):
        parse_timestamp("invalid date", ("%Y-%m-%d",))
