import logging
import re
from typing import Optional, Pattern

import pymarc

from marc_indexer.helpers.linkage import NOT_LINKAGE_SUBFIELDS, linked_alternate, linked_alternate_not_6_or_8
from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_in, subfield_not_in, subfield_value_in, subfield_values
from marc_indexer.helpers.utilities import record_id, unique

log = logging.getLogger("marc_indexer")

ISBN_TAG: str = "020"
ISSN_TAG: str = "022"
STANDARD_IDENTIFIER_TAG: str = "024"
PUBLISHER_NUMBER_TAGS: tuple = ("024", "028")
FINGERPRINT_TAG: str = "026"
SYSTEM_CONTROL_NUMBER_TAG: str = "035"

OCLC_PREFIX: str = "(OCoLC)"
# OCLC numbers can carry a prefix that indicates their length, and leading zeroes.
OCLC_NUMBER_REGEX: Pattern = re.compile(r"^\(OCoLC\)(?:ocm|ocn|on)?0*(?P<number>\d+)")
ISBN_REGEX: Pattern = re.compile(r"^[\dXx-]+")
DOI_SOURCE: str = "doi"
# A URI given as the value of an identifier.
URI_INDICATOR1: str = "7"


def _isbn_digits(value: str) -> Optional[str]:
    """The digits (and any "X" check digit) of an ISBN, or None if it is not 10 or 13 long."""
    if not (m := ISBN_REGEX.match(value.strip())):
        return None

    digits: str = m.group(0).replace("-", "").upper()
    if len(digits) == 10 and digits[:9].isdigit():
        return digits
    if len(digits) == 13 and digits.isdigit():
        return digits

    return None


def isbn10_to_isbn13(isbn: str) -> str:
    """Prefixes "978" and computes a new check digit. `isbn` must be the ten characters of an ISBN-10."""
    stem: str = f"978{isbn[:9]}"
    total: int = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(stem))
    return f"{stem}{(10 - total % 10) % 10}"


def isbn13_to_isbn10(isbn: str) -> Optional[str]:
    """Only "978" ISBN-13s have an ISBN-10 form."""
    if not isbn.startswith("978"):
        return None

    stem: str = isbn[3:12]
    check: int = (11 - sum(int(d) * (10 - i) for i, d in enumerate(stem)) % 11) % 11
    return f"{stem}{'X' if check == 10 else check}"


def _isbn_variants(value: str) -> list[str]:
    """The value as catalogued, followed by its ISBN-10 or ISBN-13 counterpart, if it has one."""
    variants: list[str] = [value.strip()]
    if (digits := _isbn_digits(value)) is None:
        return variants

    if len(digits) == 10:
        variants.append(isbn10_to_isbn13(digits))
    elif converted := isbn13_to_isbn10(digits):
        variants.append(converted)

    return variants


def _is_doi(field: pymarc.Field) -> bool:
    return subfield_value_in(field, "2", (DOI_SOURCE,))


@extractor("identifier", "mmsid")
def mmsid(record: pymarc.Record) -> Optional[str]:
    """The Alma MMS ID, from the 001."""
    return record_id(record)


@extractor("identifier", "isxn_search")
def isxn_search(record: pymarc.Record) -> list[str]:
    """
    ISBNs and ISSNs for searching, valid or not. Each ISBN is also given in its other form, so that a
    search for the ISBN-10 of a book catalogued with the ISBN-13 finds it, and the other way around.
    """
    values: list[str] = []
    for field in record.get_fields(ISBN_TAG):
        for sf in field.subfields:
            if sf.code in ("a", "z") and sf.value and sf.value.strip():
                values += _isbn_variants(sf.value)

    values += [sf.value.strip() for f in record.get_fields(ISSN_TAG) for sf in f.subfields
               if sf.code in ("a", "l", "z") and sf.value]

    return unique(values)


@extractor("identifier", "isbn_show")
def isbn_show(record: pymarc.Record) -> list[str]:
    values: list[str] = [join_subfields(f, subfield_in(("a",))) for f in record.get_fields(ISBN_TAG)]
    return unique(values + linked_alternate(record, ISBN_TAG, subfield_in(("a",))))


@extractor("identifier", "issn_show")
def issn_show(record: pymarc.Record) -> list[str]:
    values: list[str] = [join_subfields(f, subfield_in(("a",))) for f in record.get_fields(ISSN_TAG)]
    return unique(values + linked_alternate(record, ISSN_TAG, subfield_in(("a",))))


@extractor("identifier", "oclc_id")
def oclc_id(record: pymarc.Record) -> list[str]:
    """
    The OCLC number, from the first 035 $a with an "(OCoLC)" prefix. The prefix, any "ocm", "ocn" or
    "on" length marker and leading zeroes are removed. Later OCLC numbers are usually ones that
    have been merged into the first, and are not used.
    """
    for value in (v for f in record.get_fields(SYSTEM_CONTROL_NUMBER_TAG) for v in subfield_values(f, "a")):
        if not value.strip().startswith(OCLC_PREFIX):
            continue

        if m := OCLC_NUMBER_REGEX.match(value.strip()):
            return [m.group("number")]

        log.debug("Could not get an OCLC number from %s in %s", value, record_id(record))

    return []


@extractor("identifier", "publisher_number_show")
def publisher_number_show(record: pymarc.Record) -> list[str]:
    """
    Other standard identifiers (024) and publisher numbers (028), for display. DOIs are shown
    separately.
    """
    values: list[str] = [join_subfields(f, NOT_LINKAGE_SUBFIELDS) for f in record.get_fields(*PUBLISHER_NUMBER_TAGS)
                         if not _is_doi(f)]
    return unique(values + linked_alternate_not_6_or_8(record, PUBLISHER_NUMBER_TAGS))


@extractor("identifier", "publisher_number_search")
def publisher_number_search(record: pymarc.Record) -> list[str]:
    """$a of the 024 and 028, including DOIs so that they can be searched for."""
    values: list[str] = [join_subfields(f, subfield_in(("a",))) for f in record.get_fields(*PUBLISHER_NUMBER_TAGS)]
    return unique(values)


@extractor("identifier", "fingerprint_show")
def fingerprint_show(record: pymarc.Record) -> list[str]:
    """Fingerprint identifiers (026), used to identify early printed books."""
    return unique(join_subfields(f, subfield_not_in(("2", "5"))) for f in record.get_fields(FINGERPRINT_TAG))


@extractor("identifier", "doi_show")
def doi_show(record: pymarc.Record) -> list[str]:
    values: list[str] = [join_subfields(f, subfield_in(("a",))) for f in record.get_fields(STANDARD_IDENTIFIER_TAG)
                         if (f.indicator1 or "").strip() == URI_INDICATOR1 and _is_doi(f)]
    return unique(values)
