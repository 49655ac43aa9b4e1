"""
Subject access fields (6xx). Which headings are used depends on the thesaurus given in the second
indicator; see `marc_indexer.helpers.field_kinds.SubjectKind`.

See: https://www.loc.gov/marc/bibliographic/bd6xx.html
"""
import logging
from typing import Iterable, Mapping, Optional

import pymarc

from marc_indexer.helpers.field_kinds import SUBJECT_TAGS, SubjectKind, subject_kind
from marc_indexer.helpers.heading_control import has_local_prefix, source_allowed, term_override
from marc_indexer.helpers.linkage import fields_with_linked_alternates
from marc_indexer.helpers.punctuation import join_and_squish, trim_punctuation
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

CONTROL_SUBFIELDS: tuple = ("0", "1", "2", "4", "5", "6", "8", "e")
# Form, general, chronological and geographic subdivisions.
SUBDIVISION_SUBFIELDS: tuple = ("v", "x", "y", "z")
FACET_SEPARATOR: str = "--"
DISPLAY_SEPARATOR: str = " -- "


def _is_displayed(field: pymarc.Field, kinds: Optional[Iterable[SubjectKind]] = None) -> bool:
    """
    Whether a heading is shown. Local headings carrying a provenance or chronology prefix are not
    subjects, and a source-specified heading is only shown if its source is an allowed one.
    """
    kind: Optional[SubjectKind] = subject_kind(field)
    if kind is None or (kinds is not None and kind not in kinds):
        return False

    match kind:
        case SubjectKind.LCSH | SubjectKind.CHILDRENS | SubjectKind.MESH:
            return True
        case SubjectKind.LOCAL:
            return not has_local_prefix(field)
        case SubjectKind.SOURCE_SPECIFIED:
            return source_allowed(field)
        case _:
            return False


def _heading_parts(field: pymarc.Field) -> tuple[str, list[str]]:
    """The main heading, and its subdivisions, of a subject field."""
    main: list[str] = []
    subdivisions: list[str] = []
    for sf in field.subfields:
        if sf.code in CONTROL_SUBFIELDS or not sf.value or not sf.value.strip():
            continue
        if sf.code in SUBDIVISION_SUBFIELDS:
            subdivisions.append(sf.value)
        else:
            main.append(sf.value)

    return join_and_squish(main), subdivisions


def _heading_value(field: pymarc.Field, separator: str) -> str:
    main, subdivisions = _heading_parts(field)
    parts: list[str] = [trim_punctuation(p) for p in [main] + subdivisions]
    return separator.join(p for p in parts if p)


def _subject_fields(record: pymarc.Record) -> list[pymarc.Field]:
    return fields_with_linked_alternates(record, SUBJECT_TAGS)


def _show_values(record: pymarc.Record,
                 kinds: Optional[Iterable[SubjectKind]],
                 headings_to_remove: Optional[Iterable[str]],
                 heading_overrides: Optional[Mapping[str, str]]) -> list[str]:
    values: list[str] = [_heading_value(f, DISPLAY_SEPARATOR) for f in _subject_fields(record)
                         if _is_displayed(f, kinds)]
    return unique(term_override(unique(values), headings_to_remove, heading_overrides))


@extractor("subject", "search")
def search(record: pymarc.Record) -> list[str]:
    """
    Every subject heading that is displayed, in any thesaurus, with subdivisions joined by spaces
    so that phrase searches match across them.
    """
    values: list[str] = []
    for field in _subject_fields(record):
        if not _is_displayed(field):
            continue
        main, subdivisions = _heading_parts(field)
        values.append(join_and_squish([main] + subdivisions))

    return unique(values)


@extractor("subject", "facet")
def facet(record: pymarc.Record,
          headings_to_remove: Optional[Iterable[str]] = None,
          heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Subject facet values, e.g., "Cooking--France--History". Children's headings are left out as they
    duplicate the regular Library of Congress headings.

    :param record: A pymarc.Record
    :param headings_to_remove: Terms whose headings are dropped; defaults to the shared table
    :param heading_overrides: Terms to replace; defaults to the shared table
    :return: A list of facet values
    """
    kinds: tuple = (SubjectKind.LCSH, SubjectKind.MESH, SubjectKind.LOCAL, SubjectKind.SOURCE_SPECIFIED)
    values: list[str] = [_heading_value(f, FACET_SEPARATOR) for f in _subject_fields(record)
                         if _is_displayed(f, kinds)]
    return unique(term_override(unique(values), headings_to_remove, heading_overrides))


@extractor("subject", "show")
def show(record: pymarc.Record,
         headings_to_remove: Optional[Iterable[str]] = None,
         heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    kinds: tuple = (SubjectKind.LCSH, SubjectKind.SOURCE_SPECIFIED)
    return _show_values(record, kinds, headings_to_remove, heading_overrides)


@extractor("subject", "childrens_show")
def childrens_show(record: pymarc.Record,
                   headings_to_remove: Optional[Iterable[str]] = None,
                   heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    return _show_values(record, (SubjectKind.CHILDRENS,), headings_to_remove, heading_overrides)


@extractor("subject", "medical_show")
def medical_show(record: pymarc.Record,
                 headings_to_remove: Optional[Iterable[str]] = None,
                 heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    return _show_values(record, (SubjectKind.MESH,), headings_to_remove, heading_overrides)


@extractor("subject", "local_show")
def local_show(record: pymarc.Record,
               headings_to_remove: Optional[Iterable[str]] = None,
               heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    """Local headings, other than those used for provenance or chronology."""
    return _show_values(record, (SubjectKind.LOCAL,), headings_to_remove, heading_overrides)
