from typing import Callable, Optional

import pymarc
import pytest

DEFAULT_LEADER: str = "00000nam a2200000 a 4500"


def _field(tag: str,
           subfields: Optional[list[tuple[str, str]]] = None,
           indicator1: str = " ",
           indicator2: str = " ") -> pymarc.Field:
    return pymarc.Field(
        tag=tag,
        indicators=[indicator1 or " ", indicator2 or " "],
        subfields=[pymarc.Subfield(code=c, value=v) for c, v in (subfields or [])],
    )


def _control_field(tag: str, value: str) -> pymarc.Field:
    return pymarc.Field(tag=tag, data=value)


def _record(fields: Optional[list[pymarc.Field]] = None, leader: Optional[str] = None) -> pymarc.Record:
    record = pymarc.Record()
    record.leader = pymarc.Leader((leader or DEFAULT_LEADER).ljust(24)[:24])
    if fields:
        record.add_field(*fields)
    return record


@pytest.fixture
def marc_field() -> Callable[..., pymarc.Field]:
    """
    Builds a data field. Subfields are given as a list of (code, value) pairs so that codes can
    repeat, e.g., marc_field("650", [("a", "Cats"), ("x", "Behavior")], indicator2="0").
    """
    return _field


@pytest.fixture
def marc_control_field() -> Callable[..., pymarc.Field]:
    return _control_field


@pytest.fixture
def marc_record() -> Callable[..., pymarc.Record]:
    return _record


@pytest.fixture
def relator_map() -> dict[str, str]:
    return {"aut": "Author", "edt": "Editor", "ill": "Illustrator", "prf": "Performer"}


@pytest.fixture
def iso_639_2_map() -> dict[str, str]:
    return {"eng": "English", "fre": "French", "ger": "German", "und": "Undetermined"}


@pytest.fixture
def iso_639_3_map() -> dict[str, str]:
    return {"eng": "American", "fre": "Francais", "ger": "Deutsch"}


@pytest.fixture
def location_map() -> dict[str, dict]:
    return {
        "vanp": {"library": "Van Pelt-Dietrich Library Center", "specific_location": "Van Pelt - Stacks"},
        "dent": {"library": ["Health Sciences Libraries", "Levy Dental Medicine Library"],
                 "specific_location": "Levy Dental Medicine Library - Stacks"},
        "manu": {"library": "Kislak Center", "specific_location": "Secure Manuscripts Storage"},
    }
