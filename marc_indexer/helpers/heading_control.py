"""
Shared handling for subject and genre headings: which thesauri are shown, locally prefixed headings,
and the removal or replacement of undesirable terms.
"""
import logging
import re
from typing import Iterable, Mapping, Optional, Pattern

import pymarc

from marc_indexer.helpers.linkage import fields_with_linked_alternates
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import Trailer, join_and_squish, trim_trailing
from marc_indexer.helpers.subfields import subfield_values

log = logging.getLogger("marc_indexer")

# Expected in $2 of a subject or genre field when indicator 2 is "7" ("source specified"). Headings
# from any other source are not shown.
ALLOWED_SOURCE_CODES: frozenset = frozenset((
    "aat", "cct", "fast", "ftamc", "gmgpc", "gsafd", "homoit", "jlabsh", "lcgft", "lcsh", "lcstt",
    "lctgm", "local/osu", "mesh", "ndlsh", "nli", "nlksh", "rbbin", "rbgenr", "rbmscv", "rbpap",
    "rbpri", "rbprov", "rbpub", "rbtyp",
))

# Local 650s (indicator 2 of "4") whose $a starts with one of these hold provenance or chronology
# information rather than a topical heading.
PROVENANCE_PREFIX: str = "PRO"
CHRONOLOGY_PREFIX: str = "CHR"
LOCAL_PREFIXES: tuple = (PROVENANCE_PREFIX, CHRONOLOGY_PREFIX)

LOCAL_SUBJECT_TAG: str = "650"
LOCAL_INDICATOR2: str = "4"
HEADING_EXCLUDED_SUBFIELDS: tuple = ("0", "2", "5", "6", "8")


def source_allowed(field: pymarc.Field) -> bool:
    return any(v.strip() in ALLOWED_SOURCE_CODES for v in subfield_values(field, "2"))


def has_local_prefix(field: pymarc.Field, prefix: Optional[str] = None) -> bool:
    """
    True if the first $a of the field starts with `prefix` followed by a space, or with any of the
    local prefixes if `prefix` is not given.
    """
    prefixes: tuple = (prefix,) if prefix else LOCAL_PREFIXES
    suba: list[str] = subfield_values(field, "a")
    if not suba:
        return False

    return any(suba[0].startswith(f"{p} ") for p in prefixes)


def prefixed_headings(record: pymarc.Record, prefix: str) -> list[str]:
    """
    Local 650 headings, and their linked 880s, that start with `prefix`. The prefix is removed from
    the returned values.

    :param record: A pymarc.Record
    :param prefix: The local prefix, e.g., "PRO"
    :return: A list of headings, in record order
    """
    headings: list[str] = []
    for field in fields_with_linked_alternates(record, LOCAL_SUBJECT_TAG):
        if (field.indicator2 or "").strip() != LOCAL_INDICATOR2 or not has_local_prefix(field, prefix):
            continue

        parts: list[str] = []
        for sf in field.subfields:
            if sf.code in HEADING_EXCLUDED_SUBFIELDS or not sf.value:
                continue
            value: str = sf.value
            if sf.code == "a" and not parts:
                value = value[len(prefix):]
            parts.append(value)

        headings.append(trim_trailing(Trailer.PERIOD, join_and_squish(parts)))

    return [h for h in headings if h]


def _remove_regex(terms: Iterable[str]) -> Optional[Pattern]:
    terms = [t for t in terms if t]
    if not terms:
        return None

    return re.compile("|".join(terms), re.IGNORECASE)


def _replace_regex(overrides: Mapping[str, str]) -> Optional[Pattern]:
    if not overrides:
        return None

    # Longer terms first, so that "illegal aliens" is preferred to "aliens".
    keys: list[str] = sorted(overrides, key=len, reverse=True)
    return re.compile("|".join(re.escape(k) for k in keys), re.IGNORECASE)


def term_override(values: Iterable[str],
                  headings_to_remove: Optional[Iterable[str]] = None,
                  heading_overrides: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Drops any value containing a term to remove, and replaces the first overridden term in the rest.
    Removal terms are regular expressions; override keys are matched literally. Both are matched
    without regard to case.

    :param values: Headings to check
    :param headings_to_remove: Terms to remove; defaults to the shared table
    :param heading_overrides: A mapping of terms to their replacements; defaults to the shared table
    :return: The remaining values, in the same order
    """
    remove: Optional[Pattern] = _remove_regex(mapping_or_default(headings_to_remove, "headings_to_remove"))
    overrides: Mapping[str, str] = mapping_or_default(heading_overrides, "heading_overrides")
    lowered: dict[str, str] = {k.lower(): v for k, v in overrides.items()}
    replace: Optional[Pattern] = _replace_regex(overrides)

    results: list[str] = []
    for value in values:
        if remove and remove.search(value):
            log.debug("Removing heading %s", value)
            continue

        if replace and (m := replace.search(value)):
            value = f"{value[:m.start()]}{lowered[m.group(0).lower()]}{value[m.end():]}"

        results.append(value)

    return results
