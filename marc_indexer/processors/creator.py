import logging
from typing import Mapping, Optional

import pymarc

from marc_indexer.helpers.linkage import fields_with_linked_alternates, linked_fields
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import (
    Trailer,
    append_trailing,
    join_and_squish,
    join_subfields,
    substring_after,
    substring_before,
    trim_punctuation,
    trim_trailing,
)
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.relator import append_relator, relator_term_subfield
from marc_indexer.helpers.subfields import subfield_defined, subfield_in, subfield_not_in
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

TAGS: tuple = ("100", "110")
AUX_TAGS: tuple = ("100", "110", "111", "400", "410", "411", "700", "710", "711", "800", "810", "811")
CONFERENCE_TAGS: tuple = ("111", "711")
CONFERENCE_SEARCH_TAGS: tuple = ("111", "711", "811")
CORPORATE_SEARCH_TAGS: tuple = ("110", "710", "810")
CONTRIBUTOR_TAGS: tuple = ("700", "710")

DISPLAY_EXCLUDED_SUBFIELDS: tuple = ("a", "0", "1", "4", "5", "6", "8", "t")
SEARCH_EXCLUDED_SUBFIELDS: tuple = ("a", "0", "1", "4", "5", "6", "8", "t")
CONTRIBUTOR_DISPLAY_SUBFIELDS: tuple = ("a", "b", "c", "d", "j", "q", "u", "3")
# Added entries with these second indicators describe the item itself rather than a work it contains.
CONTRIBUTOR_INDICATOR2: tuple = ("", "0")

# Subfields used to build facet values, by tag. Meeting names carry different information.
FACET_SOURCE_MAP: dict[str, str] = {
    "100": "abcdjq", "110": "abcdjq", "111": "abcen",
    "700": "abcdjq", "710": "abcdjq", "711": "abcen",
    "800": "abcdjq", "810": "abcdjq", "811": "abcen",
}


def convert_name_order(name: str) -> str:
    """Turns an inverted personal name into direct order, e.g., "Surname, Name" into "Name Surname"."""
    name = trim_trailing(Trailer.COMMA, name)
    if "," not in name:
        return name

    after_comma: str = join_and_squish((trim_trailing(Trailer.COMMA, substring_after(name, ", ")),))
    before_comma: str = substring_before(name, ", ")
    return join_and_squish((after_comma, before_comma))


def abbreviate_name(name: str) -> str:
    """Shortens the forename of an inverted name to its initial, e.g., "Surname, Name" into "Surname, N."."""
    name = trim_trailing(Trailer.COMMA, name)
    if "," not in name:
        return name

    after_comma: str = join_and_squish((trim_trailing(Trailer.COMMA, substring_after(name, ",")),))
    before_comma: str = substring_before(name, ",")
    abbrv: str = f"{before_comma},"
    if after_comma:
        abbrv += f" {after_comma[0].upper()}."

    return abbrv


def _name_from_main_entry(field: pymarc.Field,
                          relator_map: Mapping[str, str],
                          convert_order: bool = False,
                          for_display: bool = True) -> str:
    excluded: tuple = DISPLAY_EXCLUDED_SUBFIELDS if for_display else SEARCH_EXCLUDED_SUBFIELDS
    relator_term_sf: str = relator_term_subfield(field)

    parts: list[str] = []
    for sf in field.subfields:
        if sf.code == "a":
            parts.append(convert_name_order(sf.value) if convert_order else trim_trailing(Trailer.COMMA, sf.value))
        elif sf.code == relator_term_sf:
            # relator terms are added back by append_relator.
            continue
        elif sf.code not in excluded:
            parts.append(sf.value)

    name: str = append_relator(field, join_and_squish(parts), relator_term_sf, relator_map)
    if not for_display:
        return name

    return append_trailing(Trailer.PERIOD, name)


def _name_search_values(record: pymarc.Record, tags: tuple, relator_map: Mapping[str, str]) -> list[str]:
    fields: list[pymarc.Field] = record.get_fields(*tags)

    values: list[str] = [_name_from_main_entry(f, relator_map, for_display=False) for f in fields]
    values += [_name_from_main_entry(f, relator_map, convert_order=True, for_display=False) for f in fields]

    for field in linked_fields(record, tags):
        names: list[str] = [convert_name_order(sf.value) for sf in field.subfields if sf.code == "a" and sf.value]
        others: str = join_subfields(field, subfield_not_in(("6", "8", "a", "t")))
        values.append(join_and_squish((names[0] if names else None, others)))

    return unique(values)


def _show_value(field: pymarc.Field, relator_map: Mapping[str, str]) -> str:
    creator: str = join_subfields(field, subfield_not_in(("0", "1", "4", "6", "8", "e", "w")))
    return append_relator(field, creator, "e", relator_map)


def _facet_value(field: pymarc.Field) -> str:
    tag: str = field.tag
    return trim_punctuation(join_subfields(field, subfield_in(FACET_SOURCE_MAP[tag])))


@extractor("creator", "search")
def search(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Main entry names, in both inverted and direct order so that either form of a name matches.

    :param record: A pymarc.Record
    :param relator_map: A mapping of relator codes to terms; defaults to the shared table
    :return: A list of names with relators
    """
    return _name_search_values(record, TAGS, mapping_or_default(relator_map, "relator"))


@extractor("creator", "search_aux")
def search_aux(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """As `search`, but for every name entry: main, series and added entries."""
    return _name_search_values(record, AUX_TAGS, mapping_or_default(relator_map, "relator"))


@extractor("creator", "show")
def show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    return unique(_show_value(f, relators) for f in fields_with_linked_alternates(record, TAGS))


@extractor("creator", "show_aux")
def show_aux(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    return unique(_name_from_main_entry(f, relators) for f in record.get_fields(*TAGS))


@extractor("creator", "sort")
def sort(record: pymarc.Record) -> Optional[str]:
    fields: list[pymarc.Field] = record.get_fields(*TAGS)
    if not fields:
        return None

    return join_subfields(fields[0], subfield_not_in(("1", "4", "6", "8", "e"))) or None


@extractor("creator", "facet")
def facet(record: pymarc.Record) -> list[str]:
    return unique(_facet_value(f) for f in record.get_fields(*FACET_SOURCE_MAP))


@extractor("creator", "show_facet_map")
def show_facet_map(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """
    Pairs each main entry as displayed with its facet value, so that a displayed name can link to
    its facet.

    :param record: A pymarc.Record
    :param relator_map: A mapping of relator codes to terms; defaults to the shared table
    :return: A dictionary of display value to facet value
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    return {_show_value(f, relators): _facet_value(f) for f in record.get_fields(*TAGS)}


@extractor("creator", "authors_list")
def authors_list(record: pymarc.Record, main_tags_only: bool = False, first_initial_only: bool = False) -> list[str]:
    """
    Names from $a of the main entry and, unless `main_tags_only`, the personal and corporate added entries.

    :param record: A pymarc.Record
    :param main_tags_only: Only use the 100 and 110
    :param first_initial_only: Shorten forenames to an initial
    :return: A list of names
    """
    tags: tuple = TAGS if main_tags_only else TAGS + CONTRIBUTOR_TAGS
    names: list[str] = []
    for field in record.get_fields(*tags):
        if not (suba := field.get("a")):
            continue

        name: str = trim_trailing(Trailer.COMMA, suba)
        names.append(abbreviate_name(name) if first_initial_only else name)

    return unique(names)


@extractor("creator", "conference_show")
def conference_show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    return unique(_name_from_main_entry(f, relators) for f in record.get_fields("111"))


def _conference_detail_value(field: pymarc.Field, relator_map: Mapping[str, str]) -> str:
    # $e and $w, subordinate unit and record control number, follow the conference name.
    conf: str = ""
    if not subfield_defined(field, "i"):
        conf = join_subfields(field, subfield_not_in(("0", "4", "5", "6", "8", "e", "j", "w")))

    sub_unit: str = join_subfields(field, subfield_in(("e", "w")))
    return append_relator(field, join_and_squish((conf, sub_unit)), "j", relator_map)


@extractor("creator", "conference_detail_show")
def conference_detail_show(record: pymarc.Record, relator_map: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Meeting names from the main (111) and added (711) entries, with any subordinate unit and relator.
    Alternate script versions are included unless they describe a related work ($i).
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")

    values: list[str] = [_conference_detail_value(f, relators) for f in record.get_fields(*CONFERENCE_TAGS)
                         if (f.indicator2 or "").strip() == ""]
    values += [_conference_detail_value(f, relators) for f in linked_fields(record, CONFERENCE_TAGS)
               if not subfield_defined(f, "i")]

    return unique(values)


@extractor("creator", "conference_search")
def conference_search(record: pymarc.Record) -> list[str]:
    return unique(join_subfields(f, subfield_in(("a", "c", "d", "e")))
                  for f in record.get_fields(*CONFERENCE_SEARCH_TAGS))


@extractor("creator", "corporate_search")
def corporate_search(record: pymarc.Record) -> list[str]:
    return unique(join_subfields(f, subfield_in(("a", "b", "c", "d")))
                  for f in record.get_fields(*CORPORATE_SEARCH_TAGS))


@extractor("creator", "contributor_show")
def contributor_show(record: pymarc.Record,
                     relator_map: Optional[Mapping[str, str]] = None,
                     name_only: bool = False,
                     vernacular: bool = True) -> list[str]:
    """
    Personal and corporate added entries (700, 710) for the item itself, with their relators.

    :param record: A pymarc.Record
    :param relator_map: A mapping of relator codes to terms; defaults to the shared table
    :param name_only: Only use $a for the name
    :param vernacular: Include alternate script versions from linked 880s
    :return: A list of contributors
    """
    relators: Mapping[str, str] = mapping_or_default(relator_map, "relator")
    fields: list[pymarc.Field] = record.get_fields(*CONTRIBUTOR_TAGS)
    if vernacular:
        fields += linked_fields(record, CONTRIBUTOR_TAGS)

    selected: tuple = ("a",) if name_only else CONTRIBUTOR_DISPLAY_SUBFIELDS

    values: list[str] = []
    for field in fields:
        if field.tag in CONTRIBUTOR_TAGS and (field.indicator2 or "").strip() not in CONTRIBUTOR_INDICATOR2:
            continue

        # $i marks a relationship to another work, which is shown with the related works instead.
        if subfield_defined(field, "i"):
            continue

        contributor: str = join_subfields(field, subfield_in(selected))
        values.append(append_relator(field, contributor, "e", relators))

    return unique(values)
