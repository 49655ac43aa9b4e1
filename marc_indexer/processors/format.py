import logging

import pymarc

from marc_indexer.helpers.linkage import linked_alternate
from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_in
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

OTHER_FORMAT_TAG: str = "776"
OTHER_FORMAT_SUBFIELDS = subfield_in(("i", "a", "s", "t", "o"))


@extractor("format", "other_show")
def other_show(record: pymarc.Record) -> list[str]:
    """
    Other physical forms in which the item is available (776), e.g., the online edition of a print
    book, and their linked alternates.
    """
    values: list[str] = [join_subfields(f, OTHER_FORMAT_SUBFIELDS) for f in record.get_fields(OTHER_FORMAT_TAG)]
    values += linked_alternate(record, OTHER_FORMAT_TAG, OTHER_FORMAT_SUBFIELDS)
    return unique(values)
