"""
Field kinds are derived once per field from its tag and indicators, so that extractors can
dispatch with a `match` statement instead of re-testing indicator values at every step.
"""
from enum import Enum, unique
from typing import Optional

import pymarc

from marc_indexer.helpers.linkage import field_or_linked_alternate_matches

SUBJECT_TAGS: tuple = ("600", "610", "611", "630", "647", "648", "650", "651")
PRODUCTION_TAG: str = "264"
LINK_TAG: str = "856"


@unique
class SubjectKind(Enum):
    """Thesaurus of a 6xx heading, from indicator 2."""
    LCSH = "0"
    CHILDRENS = "1"
    MESH = "2"
    NAL = "3"
    LOCAL = "4"
    CANADIAN = "5"
    FRENCH = "6"
    SOURCE_SPECIFIED = "7"


@unique
class ProductionKind(Enum):
    """Function of the entity named in a 264, from indicator 2."""
    PRODUCTION = "0"
    PUBLICATION = "1"
    DISTRIBUTION = "2"
    MANUFACTURE = "3"
    COPYRIGHT = "4"


@unique
class LinkKind(Enum):
    """HTTP links in an 856, by their relationship to the described resource."""
    RESOURCE = "resource"
    VERSION = "version"
    RELATED = "related"
    UNSPECIFIED = "unspecified"


def _indicator2(field: pymarc.Field) -> str:
    if field is None or field.is_control_field():
        return ""

    return (field.indicator2 or "").strip()


def subject_kind(field: pymarc.Field) -> Optional[SubjectKind]:
    """
    The kind of subject heading, for a 6xx field or an 880 linked to one. Blank indicator 2 is
    treated as an unspecified, and so local, heading.
    """
    if not field_or_linked_alternate_matches(field, SUBJECT_TAGS):
        return None

    ind2: str = _indicator2(field)
    if not ind2:
        return SubjectKind.LOCAL

    try:
        return SubjectKind(ind2)
    except ValueError:
        return None


def production_kind(field: pymarc.Field) -> Optional[ProductionKind]:
    if not field_or_linked_alternate_matches(field, PRODUCTION_TAG):
        return None

    try:
        return ProductionKind(_indicator2(field))
    except ValueError:
        return None


def link_kind(field: pymarc.Field) -> Optional[LinkKind]:
    """
    Only 856 fields with indicator 1 of "4" (HTTP) have a kind; other access methods are ignored.
    """
    if field is None or field.tag != LINK_TAG or field.is_control_field():
        return None

    if (field.indicator1 or "").strip() != "4":
        return None

    match _indicator2(field):
        case "0":
            return LinkKind.RESOURCE
        case "1":
            return LinkKind.VERSION
        case "2":
            return LinkKind.RELATED
        case "":
            return LinkKind.UNSPECIFIED
        case _:
            return None
