"""
Library and shelving location names, for faceting, from the location codes in the fields added by
Alma publishing.
"""
import logging
from typing import Any, Mapping, Optional

import pymarc

from marc_indexer.helpers.enriched import (
    API_ELEC_INVENTORY_TAG,
    PUB_ELEC_INVENTORY_TAG,
    PUB_ITEM_CURRENT_LOCATION,
    PUB_ITEM_TAG,
    PUB_PHYS_INVENTORY_TAG,
    PUB_PHYS_LOCATION_CODE,
)
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_values_for
from marc_indexer.helpers.utilities import record_id, unique

log = logging.getLogger("marc_indexer")

ONLINE_LIBRARY: str = "Online library"
# The "Penn Library Web" location, left over from the previous system; it is not a place.
WEB_LOCATION: str = "web"


def _location_codes(record: pymarc.Record) -> list[str]:
    """
    Item locations take account of temporary locations, so they are used when the record has items.
    Otherwise the holdings (permanent) locations are used.
    """
    if record.get_fields(PUB_ITEM_TAG):
        return subfield_values_for(record, PUB_ITEM_TAG, PUB_ITEM_CURRENT_LOCATION)

    return subfield_values_for(record, PUB_PHYS_INVENTORY_TAG, PUB_PHYS_LOCATION_CODE)


def _locations(record: pymarc.Record, display_value: str, location_map: Mapping[str, Any]) -> list[str]:
    values: list[str] = []
    for code in (c.strip() for c in _location_codes(record)):
        if not code or code == WEB_LOCATION:
            continue

        # Codes that cannot be mapped are usually data errors, and are left out of the facet.
        location: Optional[Mapping[str, Any]] = location_map.get(code)
        if location is None:
            log.debug("Unknown location code %s in %s", code, record_id(record))
            continue

        value: Any = location.get(display_value)
        if isinstance(value, (list, tuple)):
            values += value
        elif value:
            values.append(value)

    if record.get_fields(PUB_ELEC_INVENTORY_TAG, API_ELEC_INVENTORY_TAG):
        values.append(ONLINE_LIBRARY)

    return unique(values)


@extractor("location", "library")
def library(record: pymarc.Record, location_map: Optional[Mapping[str, Any]] = None) -> list[str]:
    """
    :param record: A pymarc.Record
    :param location_map: Location codes to location details; defaults to the shared table
    :return: A list of library names
    """
    return _locations(record, "library", mapping_or_default(location_map, "location"))


@extractor("location", "specific_location")
def specific_location(record: pymarc.Record, location_map: Optional[Mapping[str, Any]] = None) -> list[str]:
    return _locations(record, "specific_location", mapping_or_default(location_map, "location"))
