"""
Genre and form terms, from the 655.

See: https://www.loc.gov/marc/bibliographic/bd655.html
"""
import logging
from typing import Any, Mapping, Optional

import pymarc

from marc_indexer.helpers.enriched import PUB_PHYS_INVENTORY_TAG, PUB_PHYS_LOCATION_CODE
from marc_indexer.helpers.heading_control import source_allowed
from marc_indexer.helpers.linkage import fields_with_linked_alternates
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_not_in, subfield_values_for
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

GENRE_TAG: str = "655"
SEARCH_SUBFIELDS = subfield_not_in(("0", "2", "5", "c"))
DISPLAY_EXCLUDED_SUBFIELDS: tuple = ("0", "2", "5", "6", "8", "c", "e", "w")
# The genre or form term itself; everything else is a subdivision.
TERM_SUBFIELDS: tuple = ("a", "b")
# Leader/06 type of record values for manuscript material.
MANUSCRIPT_TYPES: tuple = ("d", "f", "t")
VIDEO_CATEGORY: str = "v"


def _is_displayed(field: pymarc.Field) -> bool:
    return (field.indicator2 or "").strip() in ("0", "4") or source_allowed(field)


def _display_value(field: pymarc.Field) -> str:
    genre: list[str] = []
    for sf in field.subfields:
        if sf.code in DISPLAY_EXCLUDED_SUBFIELDS or not sf.value or not sf.value.strip():
            continue
        separator: str = " " if sf.code in TERM_SUBFIELDS else " -- "
        genre.append(f"{separator}{sf.value.strip()}")

    # $e and $w are not defined for the 655, but are kept at the end if present.
    extra: str = " -- ".join(v for sf in field.subfields if sf.code in ("e", "w") and (v := sf.value.strip()))
    return f"{''.join(genre).lstrip()} {extra}".strip()


def _is_manuscript(record: pymarc.Record, location_map: Mapping[str, Any]) -> bool:
    # Leader/06 is the type of record.
    leader: str = str(record.leader or "")
    if leader[6:7] and leader[6] in MANUSCRIPT_TYPES:
        return True

    for code in subfield_values_for(record, PUB_PHYS_INVENTORY_TAG, PUB_PHYS_LOCATION_CODE):
        location: Optional[Mapping[str, Any]] = location_map.get(code.strip())
        if location and "Manuscript" in (location.get("specific_location") or ""):
            return True

    return False


def _is_video(record: pymarc.Record) -> bool:
    # 007/00 is the category of material.
    return any(f.data and f.data.startswith(VIDEO_CATEGORY) for f in record.get_fields("007"))


@extractor("genre", "search")
def search(record: pymarc.Record) -> list[str]:
    """Every genre term, whatever its source, so that any of them can be searched."""
    return unique(join_subfields(f, SEARCH_SUBFIELDS) for f in record.get_fields(GENRE_TAG))


@extractor("genre", "show")
def show(record: pymarc.Record) -> list[str]:
    """
    Genre terms for display, from the 655 and linked 880s. Only Library of Congress or unspecified
    thesaurus terms (second indicator "0" or "4"), or terms from an allowed source in $2, are shown.
    Subdivisions are set off with " -- ".
    """
    return unique(_display_value(f) for f in fields_with_linked_alternates(record, GENRE_TAG) if _is_displayed(f))


@extractor("genre", "facet")
def facet(record: pymarc.Record, location_map: Optional[Mapping[str, Any]] = None) -> list[str]:
    """
    Genre facet values. These are only given for manuscripts and videos, where the genre is a useful
    way to narrow results.

    :param record: A pymarc.Record
    :param location_map: A mapping of location codes to location details; defaults to the shared table
    :return: A list of facet values, or an empty list if the record is neither a manuscript nor a video.
    """
    locations: Mapping[str, Any] = mapping_or_default(location_map, "location")
    if not (_is_manuscript(record, locations) or _is_video(record)):
        return []

    return unique(join_subfields(f, SEARCH_SUBFIELDS) for f in record.get_fields(GENRE_TAG))
