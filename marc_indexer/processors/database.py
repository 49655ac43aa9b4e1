"""
Database types and subject categories, from the local 943 and 944 fields. Only records catalogued as
curated databases carry these.
"""
import logging
import re
from typing import Pattern

import pymarc

from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_value_matches, subfield_values
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

CATEGORY_TAG: str = "943"
TYPE_TAG: str = "944"
# 944 $a value that marks a record as a curated database.
DATABASE_FORMAT_REGEX: Pattern = re.compile(re.escape("Database & Article Index"))
# 943 $2 source code for the local communities of interest.
COMMUNITY_OF_INTEREST_REGEX: Pattern = re.compile("penncoi")


def _first_value(field: pymarc.Field, code: str) -> str:
    values: list[str] = [v for v in subfield_values(field, code) if v]
    return values[0] if values else ""


def _is_curated_database(record: pymarc.Record) -> bool:
    return any(subfield_value_matches(f, "a", DATABASE_FORMAT_REGEX) for f in record.get_fields(TYPE_TAG))


def _category_fields(record: pymarc.Record) -> list[pymarc.Field]:
    if not _is_curated_database(record):
        return []

    return [f for f in record.get_fields(CATEGORY_TAG) if subfield_value_matches(f, "2", COMMUNITY_OF_INTEREST_REGEX)]


@extractor("database", "type")
def database_type(record: pymarc.Record) -> list[str]:
    """
    The kinds of database (944 $b), e.g., "Dictionaries and Encyclopedias". Only 944 fields that mark
    the record as a database are read.

    :param record: A pymarc.Record
    :return: A list of database types
    """
    values: list[str] = [_first_value(f, "b") for f in record.get_fields(TYPE_TAG)
                         if subfield_value_matches(f, "a", DATABASE_FORMAT_REGEX)]
    return unique(v for v in values if v)


@extractor("database", "category")
def category(record: pymarc.Record) -> list[str]:
    """The subject categories (943 $a) of a curated database."""
    return unique(v for v in (_first_value(f, "a") for f in _category_fields(record)) if v)


@extractor("database", "subcategory")
def subcategory(record: pymarc.Record) -> list[str]:
    """
    Subject categories with their subcategories, as "category--subcategory". Fields without both
    parts are left out.
    """
    values: list[str] = []
    for field in _category_fields(record):
        category_value: str = _first_value(field, "a")
        subcategory_value: str = _first_value(field, "b")
        if not category_value or not subcategory_value:
            continue

        values.append(f"{category_value}--{subcategory_value}")

    return unique(values)
