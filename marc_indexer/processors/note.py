import logging

import pymarc

from marc_indexer.helpers.heading_control import PROVENANCE_PREFIX, prefixed_headings
from marc_indexer.helpers.linkage import (
    NOT_LINKAGE_SUBFIELDS,
    datafield_and_linked_alternate,
    linkage_key,
    linked_alternate,
    linked_fields,
)
from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_in, subfield_not_in, subfield_value_matches
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

NOTE_TAGS: tuple = ("500", "502", "504", "515", "518", "525", "533", "540", "550", "580", "586", "588")
# The 588 (Source of Description) only shows $a.
SOURCE_OF_DESCRIPTION_TAG: str = "588"
LOCAL_NOTE_TAGS: tuple = ("562", "563", "585", "590")
OWNERSHIP_TAG: str = "561"

ATHENAEUM_REGEX: str = r"^Athenaeum copy: "
NOT_NOTE_CONTROL_SUBFIELDS = subfield_not_in(("5", "6", "8"))
SUBFIELD_A = subfield_in(("a",))


def _note_value(field: pymarc.Field) -> str:
    tag: str = linkage_key(field) if field.tag == "880" else field.tag
    if tag == SOURCE_OF_DESCRIPTION_TAG:
        return join_subfields(field, SUBFIELD_A)

    return join_subfields(field, NOT_NOTE_CONTROL_SUBFIELDS)


@extractor("note", "notes_show")
def notes_show(record: pymarc.Record) -> list[str]:
    """
    General notes for display, from the 5xx fields in NOTE_TAGS and any linked alternates.
    """
    values: list[str] = [_note_value(f) for f in record.get_fields(*NOTE_TAGS)]
    values += [_note_value(f) for f in linked_fields(record, NOTE_TAGS)]
    return unique(values)


@extractor("note", "local_notes_show")
def local_notes_show(record: pymarc.Record) -> list[str]:
    """
    Notes specific to the local copy. Of the ownership notes (561), only those for the Athenaeum
    copy are local; the rest are shown as provenance.
    """
    values: list[str] = [join_subfields(f, SUBFIELD_A) for f in record.get_fields(OWNERSHIP_TAG)
                         if subfield_value_matches(f, "a", ATHENAEUM_REGEX)]
    values += [join_subfields(f, NOT_NOTE_CONTROL_SUBFIELDS) for f in record.get_fields(*LOCAL_NOTE_TAGS)]
    values += linked_alternate(record, LOCAL_NOTE_TAGS, NOT_NOTE_CONTROL_SUBFIELDS)
    return unique(values)


def _is_provenance(field: pymarc.Field) -> bool:
    ind1: str = (field.indicator1 or "").strip()
    ind2: str = (field.indicator2 or "").strip()
    return ind1 in ("", "1") and ind2 == ""


@extractor("note", "provenance_show")
def provenance_show(record: pymarc.Record) -> list[str]:
    """
    Ownership and custodial history: 561s that are not Athenaeum copy notes, their linked
    alternates, and local provenance headings (650 "PRO ...").
    """
    values: list[str] = [join_subfields(f, SUBFIELD_A) for f in record.get_fields(OWNERSHIP_TAG)
                         if _is_provenance(f) and not subfield_value_matches(f, "a", ATHENAEUM_REGEX)]
    values += [join_subfields(f, SUBFIELD_A) for f in linked_fields(record, OWNERSHIP_TAG) if _is_provenance(f)]
    values += prefixed_headings(record, PROVENANCE_PREFIX)
    return unique(values)


@extractor("note", "contents_show")
def contents_show(record: pymarc.Record) -> list[str]:
    """Formatted contents notes (505), split into their parts on "--"."""
    values: list[str] = []
    for field in record.get_fields("505") + linked_fields(record, "505"):
        values += [part.strip() for part in join_subfields(field, NOT_LINKAGE_SUBFIELDS).split("--")]

    return unique(values)


@extractor("note", "access_restriction_show")
def access_restriction_show(record: pymarc.Record) -> list[str]:
    return unique(join_subfields(f, subfield_not_in(("5", "6"))) for f in record.get_fields("506"))


@extractor("note", "finding_aid_show")
def finding_aid_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "555"))


@extractor("note", "participant_show")
def participant_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "511"))


@extractor("note", "credits_show")
def credits_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "508"))


@extractor("note", "biography_show")
def biography_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "545"))


@extractor("note", "summary_show")
def summary_show(record: pymarc.Record) -> list[str]:
    return unique(datafield_and_linked_alternate(record, "520"))


@extractor("note", "arrangement_show")
def arrangement_show(record: pymarc.Record) -> list[str]:
    """Organization and arrangement of materials (351)."""
    return unique(datafield_and_linked_alternate(record, "351"))
