"""
Series statements (4xx) and series added entries (8xx), and the preceding and succeeding entries
(780, 785) that record a serial's chronological relationships.
"""
import logging
import re
from typing import Mapping, Optional

import pymarc

from marc_indexer.helpers.linkage import fields_with_linked_alternates, linked_fields
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import Trailer, append_trailing, join_and_squish, join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.relator import translate_relator
from marc_indexer.helpers.subfields import subfield_in, subfield_not_in
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

# In order of preference; the first of these present determines how the series is shown.
DISPLAY_TAGS: tuple = ("800", "810", "811", "830", "400", "410", "411", "440", "490")
NAME_TAGS: tuple = ("800", "810", "811", "400", "410", "411")
ADDED_ENTRY_TAGS: tuple = ("800", "810", "811", "830")
STATEMENT_TAGS: tuple = ("400", "410", "411", "440", "490")

PARENTHESES_REGEX = re.compile(r"[()]")
CONTINUES_SUBFIELDS = subfield_in(("i", "a", "s", "t", "n", "d"))


def _with_relators(field: pymarc.Field, excluded: tuple, relator_map: Mapping[str, str]) -> str:
    """Joins the field, replacing each $4 code with its term, preceded by a comma."""
    parts: list[str] = []
    for sf in field.subfields:
        if sf.code == "4":
            if term := translate_relator(sf.value, relator_map):
                parts.append(f", {term}")
        elif sf.code not in excluded:
            parts.append(f" {sf.value}")

    return "".join(parts)


def _name_show_entries(field: pymarc.Field, relator_map: Mapping[str, str]) -> str:
    series: str = join_subfields(field, subfield_not_in(("0", "4", "5", "6", "8", "e", "t", "w", "v", "n")))

    # relator terms, titles and volume numbers follow the name.
    appended: list[str] = []
    for sf in field.subfields:
        if sf.code in ("e", "w", "v", "n", "t") and sf.value:
            appended.append(f" {sf.value}")
        elif sf.code == "4" and (term := translate_relator(sf.value, relator_map)):
            appended.append(f", {term}")

    return join_and_squish((series, "".join(appended)))


def _title_show_entries(field: pymarc.Field) -> str:
    series: str = join_subfields(field, subfield_not_in(("0", "5", "6", "8", "c", "e", "w", "v", "n")))
    appended: str = join_subfields(field, subfield_in(("c", "e", "w", "v", "n")))
    return join_and_squish((series, appended))


@extractor("series", "show")
def show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Series for display. Every field with the most preferred series tag in the record is formatted in
    full; fields with the other series tags, and linked alternates, are shown as they are.
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    tags_present: list[str] = [tag for tag in DISPLAY_TAGS if record.get_fields(tag)]
    if not tags_present:
        return unique(join_subfields(f, subfield_not_in(("5", "6", "8"))) for f in linked_fields(record, DISPLAY_TAGS))

    first_tag: str = tags_present[0]
    values: list[str]
    if first_tag in NAME_TAGS:
        values = [_name_show_entries(f, relators) for f in record.get_fields(first_tag)]
    else:
        values = [_title_show_entries(f) for f in record.get_fields(first_tag)]

    if remaining := tags_present[1:]:
        values += [join_subfields(f, subfield_not_in(("0", "5", "6", "8"))) for f in record.get_fields(*remaining)]

    values += [join_subfields(f, subfield_not_in(("5", "6", "8"))) for f in linked_fields(record, DISPLAY_TAGS)]
    return unique(values)


@extractor("series", "values")
def values(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    A single series value for search results: the first series added entry or, failing that, the
    first series statement, with a closing period.
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")

    if added_entries := record.get_fields(*ADDED_ENTRY_TAGS):
        value: str = _with_relators(added_entries[0], ("0", "5", "6", "8"), relators)
    elif statements := record.get_fields(*STATEMENT_TAGS):
        value = _with_relators(statements[0], ("0", "6", "8"), relators)
    else:
        return []

    return unique([append_trailing(Trailer.PERIOD, join_and_squish((value,)))])


@extractor("series", "search")
def search(record: pymarc.Record) -> list[str]:
    results: list[str] = []

    for field in record.get_fields("400", "410", "411"):
        # With an indicator 2 of "0" the main entry is not represented by a pronoun, so $a is kept.
        excluded: tuple = ("4", "6", "8") if (field.indicator2 or "").strip() != "0" else ("4", "6", "8", "a")
        results.append(join_subfields(field, subfield_not_in(excluded)))

    results += [join_subfields(f, subfield_not_in(("0", "5", "6", "8", "w"))) for f in record.get_fields("440")]
    results += [join_subfields(f, subfield_not_in(("0", "4", "5", "6", "7", "8", "w")))
                for f in record.get_fields("800", "810", "811")]
    results += [join_subfields(f, subfield_not_in(("0", "5", "6", "7", "8", "w"))) for f in record.get_fields("830")]

    # Series statements of a reproduction, in the 533 $f, are given in parentheses.
    for field in record.get_fields("533"):
        statements: list[str] = [PARENTHESES_REGEX.sub("", sf.value) for sf in field.subfields
                                 if sf.code == "f" and sf.value]
        results.append(join_and_squish(statements))

    return unique(results)


def _continues(record: pymarc.Record, tag: str) -> list[str]:
    return unique(join_subfields(f, CONTINUES_SUBFIELDS) for f in fields_with_linked_alternates(record, tag))


@extractor("series", "continues_show")
def continues_show(record: pymarc.Record) -> list[str]:
    """Preceding entries (780): the serial this one continues."""
    return _continues(record, "780")


@extractor("series", "continued_by_show")
def continued_by_show(record: pymarc.Record) -> list[str]:
    """Succeeding entries (785): the serial that continues this one."""
    return _continues(record, "785")
