"""
How a record can be accessed, based on the inventory fields added when the record is enriched on
export from Alma.
"""
import logging

import pymarc

from marc_indexer.helpers.enriched import ELEC_INVENTORY_TAGS, PHYS_INVENTORY_TAGS
from marc_indexer.helpers.field_kinds import LINK_TAG, LinkKind, link_kind
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_values

log = logging.getLogger("marc_indexer")

ONLINE: str = "Online"
AT_THE_LIBRARY: str = "At the library"

FINDING_AID_NOTE: str = "Finding aid"
FINDING_AID_HOST: str = "hdl.library.upenn.edu"


def _has_finding_aid_link(record: pymarc.Record) -> bool:
    """
    An HTTP link in an 856 to an online finding aid (on the Penn handle server), where the link is to
    the resource and not to something related.
    """
    for field in record.get_fields(LINK_TAG):
        if link_kind(field) in (None, LinkKind.RELATED):
            continue

        if not any(FINDING_AID_NOTE in note for note in subfield_values(field, "z")):
            continue

        if any(FINDING_AID_HOST in url for url in subfield_values(field, "u")):
            return True

    return False


@extractor("access", "facet")
def facet(record: pymarc.Record) -> list[str]:
    """
    "At the library" for records with physical holdings, and "Online" for records with electronic
    holdings or a link to an online finding aid.
    """
    values: list[str] = []
    if record.get_fields(*PHYS_INVENTORY_TAGS):
        values.append(AT_THE_LIBRARY)

    if record.get_fields(*ELEC_INVENTORY_TAGS) or _has_finding_aid_link(record):
        values.append(ONLINE)

    return values
