"""
Date handling for the fixed-length data elements in the 008, the 005 transaction timestamp, and
the item creation dates added by Alma enrichment.

See: https://www.loc.gov/marc/bibliographic/bd008a.html
"""
import datetime
import logging
import re
from typing import NamedTuple, Optional, Pattern

import edtf
from edtf.parser.edtf_exceptions import EDTFParseException

log = logging.getLogger("marc_indexer")

# A Date1 or Date2 value: four characters, digits or "u" for an unknown digit.
FIXED_DATE_REGEX: Pattern = re.compile(r"^[0-9u]{4}$")
# "9999" in Date2 means the resource is still being published.
OPEN_DATE: str = "9999"
# Date types where Date1 and Date2 describe a range.
RANGE_DATE_TYPES: frozenset = frozenset("cdikmqu")


class FixedDates(NamedTuple):
    date_type: str
    date1: str
    date2: str


def fixed_dates(control_value: Optional[str]) -> Optional[FixedDates]:
    """
    Splits the date elements out of an 008 value: type of date (06), Date1 (07-10) and Date2 (11-14).

    :param control_value: The data of an 008 field
    :return: The three elements, or None if the value is too short to hold them.
    """
    if not control_value or len(control_value) < 15:
        return None

    return FixedDates(control_value[6], control_value[7:11], control_value[11:15])


def _to_edtf(value: str) -> Optional[str]:
    if not FIXED_DATE_REGEX.match(value):
        return None

    # EDTF marks an unspecified digit with "X", where MARC uses "u".
    return value.replace("u", "X")


def year_range(date1: str, date2: Optional[str] = None) -> tuple[Optional[int], Optional[int]]:
    """
    Interprets a pair of fixed-field dates as a start and end year. Unknown digits widen the range,
    so that "19uu" is 1900 to 1999. A Date2 of "9999" leaves the end open.

    :param date1: The Date1 element
    :param date2: The Date2 element, if the date type describes a range
    :return: A tuple of start and end year; either may be None.
    """
    # A Date1 with no known digit, e.g., "uuuu", says nothing about when the item was published.
    start: Optional[str] = _to_edtf(date1)
    if start is None or not any(c.isdigit() for c in date1):
        return None, None

    end: Optional[str] = None
    if date2 and date2 != OPEN_DATE:
        end = _to_edtf(date2)

    try:
        parsed_start = edtf.parse_edtf(start)
        parsed_end = edtf.parse_edtf(end) if end else parsed_start
    except EDTFParseException as e:
        log.debug("Error parsing fixed dates %s and %s: %s", date1, date2, e)
        return None, None

    start_year: int = parsed_start.lower_strict()[0]
    end_year: Optional[int] = parsed_end.upper_strict()[0]

    if date2 == OPEN_DATE:
        end_year = None

    # remember start_year and end_year could be 0, which is also falsey
    if end_year is not None and start_year > end_year:
        log.warning("Error parsing date: start %s is greater than end %s from %s, %s",
                    start_year, end_year, date1, date2)
        return None, None

    return start_year, end_year


def parse_timestamp(value: str, formats: tuple) -> datetime.datetime:
    """
    Tries each format in turn. A value with trailing data beyond the format, e.g., hundredths
    of a second, is parsed by its leading portion.

    :raises ValueError: if none of the formats match.
    """
    cleaned: str = value.strip()
    for fmt in formats:
        try:
            return datetime.datetime.strptime(cleaned, fmt)
        except ValueError as err:
            # "unconverted data remains" is the only error where a shorter prefix can still match.
            if not str(err).startswith("unconverted data remains"):
                continue
            remains: str = str(err).split(": ", 1)[-1]
            return datetime.datetime.strptime(cleaned[:-len(remains)], fmt)

    raise ValueError(f"time data {value!r} does not match any of {', '.join(formats)}")
