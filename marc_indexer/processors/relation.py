"""
Relationships between the described item and other works: host items, constituent units,
supplements, related and contained works, and related collections.
"""
import logging
from typing import Mapping, Optional

import pymarc

from marc_indexer.helpers.heading_control import CHRONOLOGY_PREFIX, prefixed_headings
from marc_indexer.helpers.linkage import datafield_and_linked_alternate, linked_alternate, linked_fields
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import join_and_squish, join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.relator import translate_relator
from marc_indexer.helpers.subfields import subfield_defined, subfield_in, subfield_not_in
from marc_indexer.helpers.utilities import unique
from marc_indexer.processors.edition import relationship_label

log = logging.getLogger("marc_indexer")

RELATED_WORK_TAGS: tuple = ("700", "710", "711", "730")
CONTAINS_TAGS: tuple = ("700", "710", "711", "730", "740")
# Analytical entries describe a work contained in the item.
ANALYTICAL_ENTRY: str = "2"
CONSTITUENT_SUBFIELDS = subfield_in(("i", "a", "s", "t"))


def _indicator2(field: pymarc.Field) -> str:
    return (field.indicator2 or "").strip()


def _labelled_entry(field: pymarc.Field, excluded: tuple, relator_map: Mapping[str, str]) -> str:
    """
    "label: entry", where the label comes from $i and the entry is every other subfield not in
    `excluded`, with $4 codes translated and set off by a comma.
    """
    parts: list[str] = []
    for sf in field.subfields:
        if sf.code == "4":
            if term := translate_relator(sf.value, relator_map):
                parts.append(f", {term}")
        elif sf.code != "i" and sf.code not in excluded and sf.value:
            parts.append(f" {sf.value.strip()}")

    entry: str = join_and_squish(("".join(parts),)).replace(" ,", ",")
    label: str = relationship_label(field)
    if label and entry:
        return f"{label}: {entry}"

    return label or entry


@extractor("relation", "contained_in_show")
def contained_in_show(record: pymarc.Record) -> list[str]:
    """Host item entries (773)."""
    return unique(join_subfields(f, subfield_not_in(("6", "7", "8", "w"))) for f in record.get_fields("773"))


@extractor("relation", "chronology_show")
def chronology_show(record: pymarc.Record) -> list[str]:
    """Local chronology headings (650 "CHR ..."), and their alternates, without the prefix."""
    return unique(prefixed_headings(record, CHRONOLOGY_PREFIX))


@extractor("relation", "related_collections_show")
def related_collections_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "544"))


@extractor("relation", "publications_about_show")
def publications_about_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "581"))


@extractor("relation", "related_work_show")
def related_work_show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Works related to the item: name-title and title added entries with a title ($t) and a blank
    second indicator, e.g., "Adaptation of: Author. Title".

    :param record: A pymarc.Record
    :param relator_map: A mapping of relator codes to terms; defaults to the shared table
    :return: A list of related works
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    fields: list[pymarc.Field] = record.get_fields(*RELATED_WORK_TAGS) + linked_fields(record, RELATED_WORK_TAGS)

    return unique(_labelled_entry(f, ("0", "5", "6", "8"), relators) for f in fields
                  if _indicator2(f) == "" and subfield_defined(f, "t"))


@extractor("relation", "contains_show")
def contains_show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """Works contained in the item: analytical added entries (second indicator "2")."""
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    fields: list[pymarc.Field] = record.get_fields(*CONTAINS_TAGS) + linked_fields(record, CONTAINS_TAGS)

    return unique(_labelled_entry(f, ("0", "5", "6", "8"), relators) for f in fields
                  if _indicator2(f) == ANALYTICAL_ENTRY)


@extractor("relation", "constituent_unit_show")
def constituent_unit_show(record: pymarc.Record) -> list[str]:
    values: list[str] = [join_subfields(f, CONSTITUENT_SUBFIELDS) for f in record.get_fields("774")]
    return unique(values + linked_alternate(record, "774", CONSTITUENT_SUBFIELDS))


@extractor("relation", "has_supplement_show")
def has_supplement_show(record: pymarc.Record) -> list[str]:
    """Supplement and special issue entries (770)."""
    return unique(datafield_and_linked_alternate(record, "770"))
