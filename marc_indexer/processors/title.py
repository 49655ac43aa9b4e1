import logging
from typing import Optional

import pymarc

from marc_indexer.helpers.linkage import (
    NOT_LINKAGE_SUBFIELDS,
    fields_with_linked_alternates,
    linkage_key,
    linked_alternate,
)
from marc_indexer.helpers.punctuation import Trailer, join_and_squish, join_subfields, trim_trailing
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_defined, subfield_in, subfield_not_in
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

TITLE_TAG: str = "245"
STANDARDIZED_TAGS: tuple = ("130", "240")
ADDED_TITLE_TAG: str = "730"
VARIANT_TITLE_TAG: str = "246"
UNCONTROLLED_TITLE_TAG: str = "740"
FORMER_TITLE_TAG: str = "247"

# Analytical entries (indicator 2 of "2") describe a work contained in the item, not the item itself.
ANALYTICAL_ENTRY: str = "2"
NOT_CONTROL_SUBFIELDS = subfield_not_in(("0", "1", "5", "6", "8"))


def _title_field(record: pymarc.Record) -> Optional[pymarc.Field]:
    fields: list[pymarc.Field] = record.get_fields(TITLE_TAG)
    return fields[0] if fields else None


def _title_value(field: pymarc.Field) -> str:
    """
    Builds a title from a 245. The title proper comes from $a or, when there is no $a, from the form
    in $k. $b, $n and $p follow. If $a (or $h) ends in "=" or ":" that mark is kept between the two
    parts, since it shows that what follows is a parallel or other title.
    """
    a_or_k: str = ""
    for sf in field.subfields:
        if sf.code in ("a", "k") and sf.value:
            a_or_k = trim_trailing(Trailer.COMMA, trim_trailing(Trailer.SLASH, sf.value).rstrip())
            break

    remainder: str = join_and_squish(trim_trailing(Trailer.SLASH, sf.value)
                                     for sf in field.subfields if sf.code in ("b", "n", "p"))

    medium: list[str] = [sf.value.rstrip() for sf in field.subfields if sf.code == "h" and sf.value]
    endings: tuple = (a_or_k[-1:], medium[0][-1:] if medium else "")

    punct: Optional[str] = None
    if "=" in endings:
        punct = "="
    elif ":" in endings:
        punct = ":"

    title: str = trim_trailing(Trailer.COLON, trim_trailing(Trailer.EQUAL, a_or_k))
    return join_and_squish((title, punct, remainder))


@extractor("title", "search")
def search(record: pymarc.Record) -> list[str]:
    values: list[str] = [_title_value(f) for f in record.get_fields(TITLE_TAG)[:1]]
    values += linked_alternate(record, TITLE_TAG, subfield_in(("a", "b", "k", "n", "p")))
    return unique(values)


@extractor("title", "show")
def show(record: pymarc.Record) -> str:
    """
    The title for display. Any alternate script versions are added as parallel titles.
    """
    field: Optional[pymarc.Field] = _title_field(record)
    if not field:
        return ""

    values: list[str] = [_title_value(field)]
    values += [f"= {alt}" for alt in linked_alternate(record, TITLE_TAG, NOT_LINKAGE_SUBFIELDS)]
    return join_and_squish(values)


@extractor("title", "sort")
def sort(record: pymarc.Record) -> Optional[str]:
    """
    A title for sorting. Indicator 2 of the 245 gives the number of non-filing characters (e.g., 4 for
    "The "); these are moved to the end. A leading bracket is moved in the same way.
    """
    field: Optional[pymarc.Field] = _title_field(record)
    if not field:
        return None

    raw_title: str = join_subfields(field, subfield_in(("a",))) or join_subfields(field, subfield_in(("k",)))
    ind2: str = (field.indicator2 or "").strip()
    offset: int = int(ind2) if ind2.isdigit() else 0

    prefix: str
    filing: str
    if 1 <= offset <= 9:
        prefix, filing = raw_title[:offset].strip(), raw_title[offset:].strip()
    elif raw_title.startswith("["):
        prefix, filing = "[", raw_title[1:]
    else:
        prefix, filing = "", raw_title

    filing = join_and_squish((filing, join_subfields(field, subfield_in(("b", "n", "p")))))
    return join_and_squish((filing, prefix))


def _is_printed_uniform_title(field: pymarc.Field) -> bool:
    return (field.indicator2 or "").strip() == "" and not subfield_defined(field, "i")


@extractor("title", "standardized")
def standardized(record: pymarc.Record) -> list[str]:
    """Uniform titles from the 130 and 240, and added uniform titles from the 730."""
    values: list[str] = []
    for field in fields_with_linked_alternates(record, STANDARDIZED_TAGS + (ADDED_TITLE_TAG,)):
        tag: str = linkage_key(field) if field.tag == "880" else field.tag
        if tag == ADDED_TITLE_TAG and not _is_printed_uniform_title(field):
            continue

        values.append(join_subfields(field, NOT_CONTROL_SUBFIELDS))

    return unique(values)


@extractor("title", "other")
def other(record: pymarc.Record) -> list[str]:
    """Varying forms of title (246) and uncontrolled related titles (740), excluding analytical entries."""
    values: list[str] = []
    for field in fields_with_linked_alternates(record, (VARIANT_TITLE_TAG, UNCONTROLLED_TITLE_TAG)):
        tag: str = linkage_key(field) if field.tag == "880" else field.tag
        if tag == UNCONTROLLED_TITLE_TAG and (field.indicator2 or "").strip() == ANALYTICAL_ENTRY:
            continue

        values.append(join_subfields(field, NOT_CONTROL_SUBFIELDS))

    return unique(values)


@extractor("title", "former")
def former(record: pymarc.Record) -> list[str]:
    values: list[str] = []
    for field in fields_with_linked_alternates(record, FORMER_TITLE_TAG):
        former_title: str = join_subfields(field, subfield_not_in(("6", "8", "e", "w")))
        # $e and $w are appended after the title proper.
        former_title_append: str = join_subfields(field, subfield_in(("e", "w")))
        values.append(join_and_squish((former_title, former_title_append)))

    return unique(values)
