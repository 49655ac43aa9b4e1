import pytest

from marc_indexer.processors import subject

NO_OVERRIDES: dict = {"headings_to_remove": [], "heading_overrides": {}}


@pytest.fixture
def subject_record(marc_record, marc_field):
    return marc_record([
        marc_field("650", [("a", "Cooking."), ("z", "France"), ("x", "History."), ("0", "http://id.loc.gov/sh1")], " ", "0"),
        marc_field("650", [("a", "Cats.")], " ", "1"),
        marc_field("650", [("a", "Neoplasms.")], " ", "2"),
        marc_field("650", [("a", "Local Heading.")], " ", "4"),
        marc_field("650", [("a", "PRO Surname, Name")], " ", "4"),
        marc_field("650", [("a", "Magic"), ("2", "fast")], " ", "7"),
        marc_field("650", [("a", "Astronomy"), ("2", "zzzz")], " ", "7"),
        marc_field("650", [("a", "Canadian Heading")], " ", "5"),
    ])


def test_search(subject_record):
    assert subject.search(subject_record) == [
        "Cooking. France History.", "Cats.", "Neoplasms.", "Local Heading.", "Magic",
    ]


def test_facet_leaves_out_childrens_headings(subject_record):
    assert subject.facet(subject_record, **NO_OVERRIDES) == [
        "Cooking--France--History", "Neoplasms", "Local Heading", "Magic",
    ]


def test_show_by_thesaurus(subject_record):
    assert subject.show(subject_record, **NO_OVERRIDES) == ["Cooking -- France -- History", "Magic"]
    assert subject.childrens_show(subject_record, **NO_OVERRIDES) == ["Cats"]
    assert subject.medical_show(subject_record, **NO_OVERRIDES) == ["Neoplasms"]
    assert subject.local_show(subject_record, **NO_OVERRIDES) == ["Local Heading"]


def test_linked_alternates_are_included(marc_record, marc_field):
    record = marc_record([
        marc_field("651", [("6", "880-01"), ("a", "France"), ("x", "History")], " ", "0"),
        marc_field("880", [("6", "651-01"), ("a", "Alternate France")], " ", "0"),
    ])
    assert subject.show(record, **NO_OVERRIDES) == ["France -- History", "Alternate France"]


def test_headings_are_overridden_and_removed(marc_record, marc_field):
    record = marc_record([
        marc_field("650", [("a", "Illegal aliens"), ("z", "United States.")], " ", "0"),
        marc_field("650", [("a", "Unwanted heading")], " ", "0"),
    ])
    kwargs: dict = {"headings_to_remove": ["unwanted"], "heading_overrides": {"illegal aliens": "Undocumented immigrants"}}

    assert subject.show(record, **kwargs) == ["Undocumented immigrants -- United States"]
    assert subject.facet(record, **kwargs) == ["Undocumented immigrants--United States"]
