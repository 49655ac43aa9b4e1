import re
from enum import Enum, unique
from typing import Iterable, Optional, Pattern, Union

import pymarc

from marc_indexer.exceptions import InvalidArgumentException
from marc_indexer.helpers.subfields import SubfieldPredicate

WHITESPACE_REGEX: Pattern = re.compile(r"\s+")


@unique
class Trailer(Enum):
    SEMICOLON = ";"
    COLON = ":"
    EQUAL = "="
    SLASH = "/"
    COMMA = ","
    PERIOD = "."


# Each pattern consumes a whole trailing run of the character (with any surrounding
# whitespace) so that trimming twice gives the same result as trimming once.
TRAILING_PUNCTUATION: dict[Trailer, Pattern] = {
    Trailer.SEMICOLON: re.compile(r"(?:\s*;)+\s*$"),
    Trailer.COLON: re.compile(r"(?:\s*:)+\s*$"),
    Trailer.EQUAL: re.compile(r"(?:\s*=)+\s*$"),
    Trailer.SLASH: re.compile(r"(?:\s*/)+\s*$"),
    Trailer.COMMA: re.compile(r"(?:\s*,)+\s*$"),
    # Only strip a period if it follows at least three word characters, so that initials
    # ("J.") and most short abbreviations survive. "etc." is still trimmed; this is a heuristic.
    Trailer.PERIOD: re.compile(r"(?<=\w{3})\.\s*$"),
}

# Values that already end with one of these never get an additional mark appended.
TERMINAL_CHARACTERS: tuple = (".", "-")

# A trailing period that follows a single capital letter is almost certainly an initial.
INITIAL_PERIOD_REGEX: Pattern = re.compile(r"(?:^|\s)[A-Z]\.$")
FACET_TRAILING_REGEX: Pattern = re.compile(r"\s*[,/;:]\s*$")


def _trailer(kind: Union[Trailer, str]) -> Trailer:
    if isinstance(kind, Trailer):
        return kind

    try:
        return Trailer[kind.upper()]
    except (KeyError, AttributeError) as err:
        raise InvalidArgumentException(f"{kind} is not a known trailing punctuation kind.") from err


def squish(value: Optional[str]) -> str:
    """Strips the value and collapses any internal run of whitespace to a single space."""
    if not value:
        return ""

    return WHITESPACE_REGEX.sub(" ", value).strip()


def join_and_squish(values: Iterable[Optional[str]], separator: str = " ") -> str:
    return squish(separator.join(v for v in values if v and v.strip()))


def join_subfields(field: pymarc.Field, predicate: SubfieldPredicate) -> str:
    """
    Joins the values of the subfields selected by `predicate`, in field order. Each value is stripped,
    blank values are skipped entirely, and the result has any run of whitespace collapsed.

    :param field: A pymarc data field
    :param predicate: A function taking a pymarc.Subfield and returning a boolean
    :return: The joined string. Never None; an empty string if nothing was selected.
    """
    if field is None or field.is_control_field():
        return ""

    values: list[str] = [sf.value.strip() for sf in field.subfields
                         if predicate(sf) and sf.value and sf.value.strip()]

    return squish(" ".join(values))


def trim_trailing(kind: Union[Trailer, str], value: Optional[str]) -> str:
    """
    Removes trailing punctuation of the given kind from the value.

    :param kind: A Trailer, or the name of one ("comma", "period", ...)
    :param value: The string to trim
    :return: The trimmed string
    """
    trailer: Trailer = _trailer(kind)
    if not value:
        return ""

    return TRAILING_PUNCTUATION[trailer].sub("", value, count=1)


def append_trailing(kind: Union[Trailer, str], value: Optional[str]) -> str:
    """
    Appends the punctuation mark for `kind`, unless the value already ends in a period or hyphen.
    Blank values are returned as-is so that a lone mark is never produced.
    """
    trailer: Trailer = _trailer(kind)
    if not value or not value.strip():
        return value or ""

    if value.endswith(TERMINAL_CHARACTERS):
        return value

    return f"{value}{trailer.value}"


def trim_punctuation(value: Optional[str]) -> str:
    """
    General clean-up for facet values: strip trailing commas, slashes, semicolons and colons, a
    trailing period unless it closes an initial, and unbalanced brackets at either end.
    """
    if not value:
        return ""

    trimmed: str = FACET_TRAILING_REGEX.sub("", value.strip())

    if trimmed.endswith(".") and not INITIAL_PERIOD_REGEX.search(trimmed) and not trimmed.endswith(".."):
        trimmed = trimmed[:-1]

    if trimmed.startswith("[") and "]" not in trimmed:
        trimmed = trimmed[1:]

    if trimmed.endswith("]") and "[" not in trimmed:
        trimmed = trimmed[:-1]

    if trimmed.startswith("(") and ")" not in trimmed:
        trimmed = trimmed[1:]

    if trimmed.endswith(")") and "(" not in trimmed:
        trimmed = trimmed[:-1]

    return trimmed.strip()


def substring_before(value: str, target: str) -> str:
    head, _, _ = value.partition(target)
    return head


def substring_after(value: str, target: str) -> str:
    _, sep, tail = value.partition(target)
    return tail if sep else ""
