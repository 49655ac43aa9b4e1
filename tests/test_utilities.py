import pytest

from marc_indexer.exceptions import MalformedIdentifierException, RequiredFieldException
from marc_indexer.helpers.utilities import (
    normalize_id,
    record_id,
    to_solr_multi,
    to_solr_multi_required,
    to_solr_single,
    to_solr_single_required,
    unique,
)


def test_unique_keeps_first_occurrence():
    assert unique(["b", "a", "", None, "b", "c"]) == ["b", "a", "c"]


def test_normalize_id():
    assert normalize_id("009977233551603681") == "9977233551603681"

    with pytest.raises(MalformedIdentifierException):
        normalize_id("mmsid")


def test_record_id(marc_record, marc_control_field):
    assert record_id(marc_record([marc_control_field("001", " 123 ")])) == "123"
    assert record_id(marc_record()) is None


def test_to_solr(marc_record, marc_field):
    record = marc_record([marc_field("650", [("a", "Cats")]), marc_field("650", [("a", "Birds")])])

    assert to_solr_multi(record, "650", "a") == ["Birds", "Cats"]
    assert to_solr_multi(record, "650", "a", sortout=False) == ["Cats", "Birds"]
    assert to_solr_single(record, "650", "a", sortout=False) == "Cats"
    assert to_solr_multi(record, "651", "a") is None
    assert to_solr_single(record, "651") is None


def test_to_solr_required(marc_record, marc_field):
    record = marc_record([marc_field("650", [("a", "Cats")])])
    assert to_solr_single_required(record, "650", "a") == "Cats"
    assert to_solr_multi_required(record, "650", "a") == ["Cats"]

    with pytest.raises(RequiredFieldException):
        to_solr_single_required(record, "245", "a")

    with pytest.raises(RequiredFieldException):
        to_solr_multi_required(record, "245", "a")
