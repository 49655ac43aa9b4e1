"""
MARC 880 "Alternate Graphic Representation" fields hold a fully content-designated copy of another
field in the same record, usually in a non-Latin script. The 880 points back to the field it
represents through its $6 (Linkage), which starts with the tag of that field, e.g., "245-01/(N".

See: https://www.loc.gov/marc/bibliographic/bd880.html
"""
import re
from typing import Iterable, Optional, Pattern, Union

import pymarc

from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.subfields import SubfieldPredicate, subfield_not_in, subfield_values

ALTERNATE_TAG: str = "880"
LINKAGE_SUBFIELD: str = "6"
LINKAGE_KEY_REGEX: Pattern = re.compile(r"^(?P<tag>\d{3})")
NOT_LINKAGE_SUBFIELDS: SubfieldPredicate = subfield_not_in(("6", "8"))


def _tag_set(tags: Union[str, Iterable[str]]) -> frozenset:
    if isinstance(tags, str):
        return frozenset((tags,))

    return frozenset(tags)


def linkage_key(field: pymarc.Field) -> Optional[str]:
    """
    The three-character tag that an 880 field is linked to, taken from the first $6 on the field.

    :param field: A pymarc.Field, normally an 880
    :return: The linked tag (e.g., "700" from "700-01"), or None if there is no usable $6.
    """
    linkage: list[str] = subfield_values(field, LINKAGE_SUBFIELD)
    if not linkage:
        return None

    if not (m := LINKAGE_KEY_REGEX.match(linkage[0].strip())):
        return None

    return m.group("tag")


def linked_fields(record: pymarc.Record, tags: Union[str, Iterable[str]]) -> list[pymarc.Field]:
    """All 880 fields in the record that are linked to one of `tags`, in record order."""
    wanted: frozenset = _tag_set(tags)
    return [f for f in record.get_fields(ALTERNATE_TAG) if linkage_key(f) in wanted]


def linked_alternate(record: pymarc.Record,
                     tags: Union[str, Iterable[str]],
                     predicate: SubfieldPredicate) -> list[str]:
    """
    Joins the subfields selected by `predicate` for every 880 linked to one of `tags`. All linked
    fields are returned, not just the first, since a record can carry alternates in several scripts.

    :param record: A pymarc.Record
    :param tags: A single tag or an iterable of tags, e.g., "245" or ("100", "110")
    :param predicate: A subfield predicate used to select subfields from each 880
    :return: A list of non-empty joined values, in record order.
    """
    values: list[str] = []
    for field in linked_fields(record, tags):
        if joined := join_subfields(field, predicate):
            values.append(joined)

    return values


def linked_alternate_not_6_or_8(record: pymarc.Record, tags: Union[str, Iterable[str]]) -> list[str]:
    # $6 is the linkage itself and $8 is a field link and sequence number; neither is useful for display.
    return linked_alternate(record, tags, NOT_LINKAGE_SUBFIELDS)


def field_or_linked_alternate_matches(field: pymarc.Field, tags: Union[str, Iterable[str]]) -> bool:
    """
    True if the field has one of `tags`, or if it is an 880 linked to one of them. Lets callers treat
    a field and its alternate script representation in the same way.
    """
    wanted: frozenset = _tag_set(tags)
    if field.tag in wanted:
        return True

    return field.tag == ALTERNATE_TAG and linkage_key(field) in wanted


def fields_with_linked_alternates(record: pymarc.Record, tags: Union[str, Iterable[str]]) -> list[pymarc.Field]:
    """The fields with `tags`, followed by any 880s linked to them."""
    wanted: frozenset = _tag_set(tags)
    return record.get_fields(*sorted(wanted)) + linked_fields(record, wanted)


def datafield_and_linked_alternate(record: pymarc.Record, tag: str) -> list[str]:
    """
    Non-blank values from every `tag` field and its linked 880s, excluding $6 and $8.
    """
    values: list[str] = [j for f in record.get_fields(tag) if (j := join_subfields(f, NOT_LINKAGE_SUBFIELDS))]
    return values + linked_alternate_not_6_or_8(record, tag)
