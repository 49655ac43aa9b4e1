"""
Production, publication, distribution and manufacture statements. Older records use the 260 (and
the obsolete 261 and 262); newer ones use the 264, where indicator 2 gives the function of the
statement.
"""
import logging
from typing import Optional

import pymarc

from marc_indexer.helpers.field_kinds import ProductionKind, production_kind
from marc_indexer.helpers.linkage import NOT_LINKAGE_SUBFIELDS, fields_with_linked_alternates, linked_fields
from marc_indexer.helpers.punctuation import join_and_squish, join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_in, subfield_not_in, subfield_values
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

TITLE_TAG: str = "245"
LEGACY_TAGS: tuple = ("260", "261", "262")
PRODUCTION_TAG: str = "264"
PLACE_TAG: str = "752"

STATEMENT_SUBFIELDS = subfield_in(("a", "b", "c"))


def _statements(record: pymarc.Record, kind: ProductionKind) -> list[str]:
    """Joined $a, $b and $c of every 264, and linked 880, of the given kind."""
    return [join_subfields(f, STATEMENT_SUBFIELDS) for f in fields_with_linked_alternates(record, PRODUCTION_TAG)
            if production_kind(f) == kind]


def _inclusive_dates(record: pymarc.Record) -> list[str]:
    # 245 $f holds the inclusive dates of archival material.
    return [v for f in record.get_fields(TITLE_TAG)[:1] for v in subfield_values(f, "f")]


def _first_kind(record: pymarc.Record, kind: ProductionKind) -> Optional[pymarc.Field]:
    return next((f for f in record.get_fields(PRODUCTION_TAG) if production_kind(f) == kind), None)


@extractor("production", "show")
def show(record: pymarc.Record) -> list[str]:
    return unique(_statements(record, ProductionKind.PRODUCTION))


@extractor("production", "distribution_show")
def distribution_show(record: pymarc.Record) -> list[str]:
    return unique(_statements(record, ProductionKind.DISTRIBUTION))


@extractor("production", "manufacture_show")
def manufacture_show(record: pymarc.Record) -> list[str]:
    return unique(_statements(record, ProductionKind.MANUFACTURE))


@extractor("production", "publication_values")
def publication_values(record: pymarc.Record) -> list[str]:
    """
    Publication information for search results. The first 260-262 is used if there is one; otherwise
    the place, publisher and date of the 264 publication statement, followed by any copyright date.
    """
    values: list[str] = _inclusive_dates(record)

    if legacy := record.get_fields(*LEGACY_TAGS):
        values.append(join_subfields(legacy[0], subfield_not_in(("6",))))
        return unique(v.strip() for v in values)

    parts: list[str] = []
    pub_dates: list[str] = []
    if publication := _first_kind(record, ProductionKind.PUBLICATION):
        parts += [sf.value for sf in publication.subfields if sf.code in ("a", "b") and sf.value]
        pub_dates = subfield_values(publication, "c")
        parts += pub_dates

    publication_value: str = join_and_squish(parts)
    if copyright_statement := _first_kind(record, ProductionKind.COPYRIGHT):
        copyright_dates: str = join_and_squish(subfield_values(copyright_statement, "c"))
        if pub_dates and copyright_dates:
            publication_value = f"{publication_value}, {copyright_dates}"
        else:
            publication_value = join_and_squish((publication_value, copyright_dates))

    values.append(publication_value)
    return unique(v.strip() for v in values)


@extractor("production", "publication_show")
def publication_show(record: pymarc.Record) -> list[str]:
    values: list[str] = _inclusive_dates(record)

    values += [join_subfields(f, NOT_LINKAGE_SUBFIELDS) for f in record.get_fields(*LEGACY_TAGS)[:1]]
    values += [join_subfields(f, NOT_LINKAGE_SUBFIELDS) for f in linked_fields(record, LEGACY_TAGS)[:1]]
    values += [join_subfields(f, subfield_in(("f",))) for f in linked_fields(record, TITLE_TAG)]
    values += _statements(record, ProductionKind.PUBLICATION)

    return unique(values)


@extractor("production", "search")
def search(record: pymarc.Record) -> list[str]:
    """Publisher names, for searching."""
    values: list[str] = [join_subfields(f, subfield_in(("b",))) for f in record.get_fields("260")]
    values += [join_subfields(f, subfield_in(("b",))) for f in record.get_fields(PRODUCTION_TAG)
               if production_kind(f) == ProductionKind.PUBLICATION]
    return unique(values)


@extractor("production", "place_of_publication_show")
def place_of_publication_show(record: pymarc.Record) -> list[str]:
    """Hierarchical place names (752), with any relator ($e) and control number ($w) after the place."""
    values: list[str] = []
    for field in fields_with_linked_alternates(record, PLACE_TAG):
        place: str = join_subfields(field, subfield_not_in(("6", "8", "e", "w")))
        place_extra: str = join_subfields(field, subfield_in(("e", "w")))
        values.append(join_and_squish((place, place_extra)))

    return unique(values)


@extractor("production", "place_of_publication_search")
def place_of_publication_search(record: pymarc.Record) -> list[str]:
    values: list[str] = [join_subfields(f, subfield_in(("a",))) for f in record.get_fields("260")]
    values += [join_subfields(f, subfield_in(("a",))) for f in record.get_fields(PRODUCTION_TAG)
               if production_kind(f) == ProductionKind.PUBLICATION]
    values += [join_subfields(f, subfield_in(("a", "b", "c", "d", "f", "g", "h")))
               for f in record.get_fields(PLACE_TAG)]
    return unique(values)
