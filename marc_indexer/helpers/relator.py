import re
from typing import Mapping, Optional, Pattern

import pymarc

from marc_indexer.helpers.linkage import field_or_linked_alternate_matches
from marc_indexer.helpers.punctuation import Trailer, append_trailing, squish, trim_trailing
from marc_indexer.helpers.subfields import subfield_values

RELATOR_CODE_SUBFIELD: str = "4"
DEFAULT_RELATOR_TERM_SUBFIELD: str = "e"
MEETING_RELATOR_TERM_SUBFIELD: str = "j"

# Meeting names use $e for "subordinate unit", so the relator term moves to $j.
MEETING_NAME_TAGS: tuple = ("111", "411", "611", "711", "811")

# A joined name that ends in an open date range, e.g., "Person, Some, 1900-".
OPEN_DATE_RANGE_REGEX: Pattern = re.compile(r"\d-$")


def translate_relator(code: Optional[str], mapping: Mapping[str, str]) -> Optional[str]:
    """
    Looks up a code in a mapping table.

    :param code: A relator (or other) code, e.g., "aut"
    :param mapping: A code map
    :return: The mapped term, or None if the code is blank or not mapped.
    """
    if not code or not code.strip():
        return None

    return mapping.get(code.strip())


def relator_term_subfield(field: pymarc.Field) -> str:
    """The subfield code that holds a literal relator term for this field (or the field its 880 represents)."""
    if field_or_linked_alternate_matches(field, MEETING_NAME_TAGS):
        return MEETING_RELATOR_TERM_SUBFIELD

    return DEFAULT_RELATOR_TERM_SUBFIELD


def relator(field: pymarc.Field, relator_term_sf: str, relator_map: Mapping[str, str]) -> str:
    """
    Gets the relator (role) for a field. Codes in $4 take priority: if any of them translate, the
    literal terms in `relator_term_sf` are ignored. Otherwise the literal terms are used.

    :param field: A pymarc.Field
    :param relator_term_sf: The subfield holding literal relator terms, usually "e" or "j"
    :param relator_map: A mapping of relator codes to terms
    :return: The relators, comma separated, or an empty string.
    """
    terms: list[str] = [t for code in subfield_values(field, RELATOR_CODE_SUBFIELD)
                        if (t := translate_relator(code, relator_map))]

    if not terms:
        terms = subfield_values(field, relator_term_sf)

    cleaned: list[str] = [v for t in terms if (v := squish(trim_trailing(Trailer.COMMA, t)))]
    return ", ".join(cleaned)


def append_relator(field: pymarc.Field,
                   joined_subfields: str,
                   relator_term_sf: str,
                   relator_map: Mapping[str, str]) -> str:
    """
    Appends the relator for a field to an already-joined value. A name ending in an open date range
    ("1900-") is followed by a space; anything else by a comma and a space. The relator is given a
    trailing period.
    """
    joined: str = squish(trim_trailing(Trailer.COMMA, joined_subfields))
    role: str = relator(field, relator_term_sf, relator_map)

    if not role:
        return joined

    role = append_trailing(Trailer.PERIOD, role)
    if not joined:
        return role

    separator: str = " " if OPEN_DATE_RANGE_REGEX.search(joined) else ", "
    return f"{joined}{separator}{role}"
