"""
Dates for sorting, range searches and "new arrivals" lists. Values embedded in the record are not
always well-formed; anything that cannot be parsed is logged and given as None.
"""
import datetime
import logging
from typing import Optional

import pymarc

from marc_indexer.helpers.datelib import FixedDates, RANGE_DATE_TYPES, fixed_dates, parse_timestamp, year_range
from marc_indexer.helpers.enriched import PUB_ITEM_DATE_CREATED, PUB_ITEM_TAG
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_values_for
from marc_indexer.helpers.utilities import record_id

log = logging.getLogger("marc_indexer")

# Most specific first; a shorter format would also match the start of a longer value.
DATE_ADDED_FORMATS: tuple = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d")
LAST_UPDATED_FORMATS: tuple = ("%Y%m%d%H%M%S.%f", "%Y%m%d%H%M%S")


def _control_value(record: pymarc.Record, tag: str) -> Optional[str]:
    fields: list[pymarc.Field] = record.get_fields(tag)
    if not fields:
        return None

    return fields[0].data


@extractor("date", "publication")
def publication(record: pymarc.Record) -> Optional[datetime.datetime]:
    """
    The publication year (Date1 in the 008) as a datetime at the start of that year.

    :param record: A pymarc.Record
    :return: A datetime, or None if Date1 is missing or is not a four-digit year.
    """
    dates: Optional[FixedDates] = fixed_dates(_control_value(record, "008"))
    if dates is None or not dates.date1.isdigit():
        return None

    try:
        return datetime.datetime(int(dates.date1), 1, 1)
    except ValueError as e:
        log.warning("Error parsing publication date. mmsid: %s, value: %s, error: %s",
                    record_id(record), dates.date1, e)
        return None


@extractor("date", "publication_range")
def publication_range(record: pymarc.Record) -> Optional[list[int]]:
    """
    The start and end years of publication, from Date1 and Date2 in the 008. Unknown digits ("19uu")
    widen the range. For single dates the end is the same as the start; for continuing resources
    ("9999") the end is left open and only the start is given.

    :param record: A pymarc.Record
    :return: [start] or [start, end], or None if Date1 cannot be used.
    """
    dates: Optional[FixedDates] = fixed_dates(_control_value(record, "008"))
    if dates is None:
        return None

    date2: Optional[str] = dates.date2 if dates.date_type in RANGE_DATE_TYPES else None
    start, end = year_range(dates.date1, date2)
    if start is None:
        return None

    return [start] if end is None else [start, end]


@extractor("date", "added")
def added(record: pymarc.Record) -> Optional[datetime.datetime]:
    """
    The date the record was added, taken as the most recent creation date of its items.
    """
    values: list[str] = [v for v in subfield_values_for(record, PUB_ITEM_TAG, PUB_ITEM_DATE_CREATED) if v.strip()]
    if not values:
        return None

    dates: list[datetime.datetime] = []
    for value in values:
        try:
            dates.append(parse_timestamp(value, DATE_ADDED_FORMATS))
        except ValueError as e:
            log.warning("Error parsing date in date added subfield. mmsid: %s, value: %s, error: %s",
                        record_id(record), value, e)

    return max(dates) if dates else None


@extractor("date", "last_updated")
def last_updated(record: pymarc.Record) -> Optional[datetime.datetime]:
    """The date and time of the latest transaction (005)."""
    value: Optional[str] = _control_value(record, "005")
    if not value or not value.strip():
        return None

    try:
        return parse_timestamp(value, LAST_UPDATED_FORMATS)
    except ValueError as e:
        log.warning("Error parsing last updated date. mmsid: %s, value: %s, error: %s",
                    record_id(record), value, e)
        return None
