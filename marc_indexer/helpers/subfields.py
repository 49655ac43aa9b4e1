import re
from typing import Callable, Iterable, Optional, Pattern, Union

import pymarc

from marc_indexer.exceptions import InvalidArgumentException

SubfieldPredicate = Callable[[pymarc.Subfield], bool]


def _subfields(field: pymarc.Field) -> list[pymarc.Subfield]:
    # Control fields have no subfields; treat them the same as an empty data field.
    if field is None or field.is_control_field():
        return []

    return field.subfields


def subfield_in(codes: Iterable[str]) -> SubfieldPredicate:
    """
    Returns a predicate that is True when a subfield's code is one of `codes`.

    :param codes: An iterable of subfield codes, e.g., ["a", "b"] or "ab"
    :return: A function taking a pymarc.Subfield
    """
    members: frozenset = frozenset(codes)
    return lambda subfield: subfield.code in members


def subfield_not_in(codes: Iterable[str]) -> SubfieldPredicate:
    """
    The complement of subfield_in: True when a subfield's code is not one of `codes`.
    """
    members: frozenset = frozenset(codes)
    return lambda subfield: subfield.code not in members


def subfield_selector(include: Optional[Iterable[str]] = None,
                      exclude: Optional[Iterable[str]] = None) -> SubfieldPredicate:
    """
    Builds either an inclusion or an exclusion predicate. Exactly one of `include` or
    `exclude` must be given.

    :raises InvalidArgumentException: if both or neither are given.
    """
    if include is not None and exclude is not None:
        raise InvalidArgumentException("Only one of 'include' or 'exclude' may be given to build a subfield selector.")

    if include is not None:
        return subfield_in(include)

    if exclude is not None:
        return subfield_not_in(exclude)

    raise InvalidArgumentException("One of 'include' or 'exclude' is required to build a subfield selector.")


def subfield_defined(field: pymarc.Field, code: str) -> bool:
    return any(sf.code == code for sf in _subfields(field))


def subfield_undefined(field: pymarc.Field, code: str) -> bool:
    return not subfield_defined(field, code)


def subfield_value_matches(field: pymarc.Field, code: str, pattern: Union[str, Pattern], flags: int = 0) -> bool:
    """
    True if any subfield with `code` has a value that matches `pattern`. Uses `re.search`
    semantics, so anchor the pattern if you want a prefix match.

    :param field: A pymarc.Field
    :param code: The subfield code to check
    :param pattern: A regular expression, either compiled or as a string
    :param flags: Regular expression flags; only used if `pattern` is a string
    :return: True if a value matched.
    """
    regex: Pattern = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)
    return any(sf.code == code and sf.value is not None and regex.search(sf.value)
               for sf in _subfields(field))


def subfield_value_in(field: pymarc.Field, code: str, candidates: Iterable[str]) -> bool:
    allowed: frozenset = frozenset(candidates)
    return any(sf.code == code and sf.value in allowed for sf in _subfields(field))


def subfield_values(field: pymarc.Field, code: str) -> list[str]:
    """
    All values of the subfields with `code`, in field order. Blank values are kept so that callers
    can decide how to handle them.
    """
    return [sf.value for sf in _subfields(field) if sf.code == code and sf.value is not None]


def subfield_values_for(record: pymarc.Record, tags: Union[str, Iterable[str]], code: str) -> list[str]:
    if isinstance(tags, str):
        tags = (tags,)

    return [v for field in record.get_fields(*tags) for v in subfield_values(field, code)]
