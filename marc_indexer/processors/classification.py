"""
Top-level Library of Congress and Dewey classes, for faceting, from the call numbers on the items
(itm, from Alma publishing) or the physical inventory (AVA, from the Alma API).
"""
import logging
from typing import Mapping, Optional

import pymarc

from marc_indexer.helpers.enriched import (
    API_PHYS_CALL_NUMBER,
    API_PHYS_CALL_NUMBER_TYPE,
    API_PHYS_INVENTORY_TAG,
    PUB_ITEM_CALL_NUMBER,
    PUB_ITEM_CALL_NUMBER_TYPE,
    PUB_ITEM_TAG,
)
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.relator import translate_relator
from marc_indexer.helpers.subfields import subfield_values
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

LOC_CALL_NUMBER_TYPE: str = "0"
DEWEY_CALL_NUMBER_TYPE: str = "1"

# Call number type subfield and call number subfield, by tag.
CALL_NUMBER_SUBFIELDS: dict[str, tuple[str, str]] = {
    PUB_ITEM_TAG: (PUB_ITEM_CALL_NUMBER_TYPE, PUB_ITEM_CALL_NUMBER),
    API_PHYS_INVENTORY_TAG: (API_PHYS_CALL_NUMBER_TYPE, API_PHYS_CALL_NUMBER),
}


def _facet_value(call_number: str, call_number_type: str, tables: Mapping[str, Mapping[str, str]]) -> Optional[str]:
    if not (table := tables.get(call_number_type)):
        return None

    class_code: str = call_number.strip()[:1]
    if not (title := translate_relator(class_code, table)):
        return None

    # The Dewey table is keyed on the first digit; the class itself is the hundred.
    if call_number_type == DEWEY_CALL_NUMBER_TYPE:
        class_code = f"{class_code}00"

    return f"{class_code} - {title}"


@extractor("classification", "facet")
def facet(record: pymarc.Record,
          loc_mapping: Optional[Mapping[str, str]] = None,
          dewey_mapping: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Class values such as "T - Technology" (Library of Congress) or "600 - Technology" (Dewey).

    :param record: A pymarc.Record
    :param loc_mapping: LC class letters to titles; defaults to the shared table
    :param dewey_mapping: Dewey class digits to titles; defaults to the shared table
    :return: A list of classes, one for each call number with a known class
    """
    tables: dict[str, Mapping[str, str]] = {
        LOC_CALL_NUMBER_TYPE: mapping_or_default(loc_mapping, "loc_classification"),
        DEWEY_CALL_NUMBER_TYPE: mapping_or_default(dewey_mapping, "dewey_classification"),
    }

    values: list[str] = []
    for field in record.get_fields(*CALL_NUMBER_SUBFIELDS):
        type_sf, number_sf = CALL_NUMBER_SUBFIELDS[field.tag]
        types: list[str] = subfield_values(field, type_sf)
        if not types:
            continue

        values += [_facet_value(n, types[0].strip(), tables) for n in subfield_values(field, number_sf) if n.strip()]

    return unique(values)
