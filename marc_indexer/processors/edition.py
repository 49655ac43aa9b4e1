import logging
import re
from typing import Optional, Pattern

import pymarc

from marc_indexer.helpers.linkage import NOT_LINKAGE_SUBFIELDS, linked_alternate_not_6_or_8, linked_fields
from marc_indexer.helpers.punctuation import Trailer, append_trailing, join_and_squish, join_subfields, squish, trim_trailing
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_defined
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

EDITION_TAG: str = "250"
OTHER_EDITION_TAG: str = "775"

PARENTHETICAL_REGEX: Pattern = re.compile(r"\s*\([^)]*\)")
# Subfields of a linking entry that are control data or already covered by the label.
OTHER_EDITION_SKIPPED: tuple = ("6", "7", "8", "e", "f", "i", "o", "r", "w", "y")


def relationship_label(field: pymarc.Field) -> str:
    """
    The relationship information ($i) of a linking entry, without any parenthetical qualifier or
    trailing colon, e.g., "Contained in (work):" becomes "Contained in".
    """
    subi: Optional[str] = field.get("i")
    if not subi:
        return ""

    label: str = PARENTHETICAL_REGEX.sub("", subi)
    return squish(trim_trailing(Trailer.COLON, label))


@extractor("edition", "show")
def show(record: pymarc.Record) -> list[str]:
    editions: list[str] = [join_subfields(f, NOT_LINKAGE_SUBFIELDS) for f in record.get_fields(EDITION_TAG)]
    return unique(editions + linked_alternate_not_6_or_8(record, EDITION_TAG))


@extractor("edition", "values")
def values(record: pymarc.Record) -> Optional[str]:
    """The first edition statement, for search results."""
    editions: list[pymarc.Field] = record.get_fields(EDITION_TAG)
    if not editions:
        return None

    return join_subfields(editions[0], NOT_LINKAGE_SUBFIELDS) or None


def _other_edition_value(field: pymarc.Field) -> str:
    prepend: str = trim_trailing(Trailer.PERIOD, relationship_label(field))

    details: list[str] = []
    for sf in field.subfields:
        if sf.code in OTHER_EDITION_SKIPPED or not sf.value:
            continue

        if sf.code == "h":
            details.append(f"({sf.value.strip()})")
        elif sf.code == "t":
            details.append(append_trailing(Trailer.PERIOD, sf.value.strip()))
        else:
            details.append(sf.value)

    if not (appended := join_and_squish(details)):
        return prepend

    return f"{prepend}: {appended}" if prepend else appended


@extractor("edition", "other_show")
def other_show(record: pymarc.Record) -> list[str]:
    """
    Other available editions (775), where the relationship is given in $i.
    """
    editions: list[str] = [_other_edition_value(f) for f in record.get_fields(OTHER_EDITION_TAG)
                           if subfield_defined(f, "i")]
    editions += [_other_edition_value(f) for f in linked_fields(record, OTHER_EDITION_TAG)
                 if (f.indicator2 or "").strip() == "" and subfield_defined(f, "i")]

    return unique(editions)
