import pytest

from marc_indexer.processors import identifier


@pytest.mark.parametrize("isbn10,isbn13", [
    ("0306406152", "9780306406157"),
    ("080442957X", "9780804429573"),
])
def test_isbn_conversion(isbn10, isbn13):
    assert identifier.isbn10_to_isbn13(isbn10) == isbn13
    assert identifier.isbn13_to_isbn10(isbn13) == isbn10


def test_isbn13_without_isbn10_form():
    assert identifier.isbn13_to_isbn10("9791234567896") is None


def test_isxn_search(marc_record, marc_field):
    record = marc_record([
        marc_field("020", [("a", "0306406152 (pbk.)"), ("q", "paperback")]),
        marc_field("020", [("z", "978-0-306-40615-7")]),
        marc_field("022", [("a", "1234-5678"), ("l", "1234-5678"), ("z", "8765-4321 ")], "0"),
    ])
    assert identifier.isxn_search(record) == [
        "0306406152 (pbk.)", "9780306406157", "978-0-306-40615-7", "0306406152", "1234-5678", "8765-4321",
    ]


def test_isbn_and_issn_show(marc_record, marc_field):
    record = marc_record([
        marc_field("020", [("6", "880-01"), ("a", "0306406152"), ("z", "invalid")]),
        marc_field("022", [("a", "1234-5678")], "0"),
        marc_field("880", [("6", "020-01"), ("a", "9780306406157")]),
    ])
    assert identifier.isbn_show(record) == ["0306406152", "9780306406157"]
    assert identifier.issn_show(record) == ["1234-5678"]


def test_mmsid(marc_record, marc_control_field):
    assert identifier.mmsid(marc_record([marc_control_field("001", "9977233551603681")])) == "9977233551603681"


@pytest.mark.parametrize("values,expected", [
    (["(PU)123", "(OCoLC)ocm00012345", "(OCoLC)999"], ["12345"]),
    (["(OCoLC)on1234567890"], ["1234567890"]),
    (["(OCoLC)ocn987654"], ["987654"]),
    (["(PU)123"], []),
])
def test_oclc_id(marc_record, marc_field, values, expected):
    record = marc_record([marc_field("035", [("a", v)]) for v in values])
    assert identifier.oclc_id(record) == expected


def test_publisher_numbers_and_doi(marc_record, marc_field):
    record = marc_record([
        marc_field("024", [("a", "10.1000/xyz123"), ("2", "doi")], "7"),
        marc_field("024", [("a", "9781234567897")], "3"),
        marc_field("028", [("6", "880-01"), ("a", "ABC-123"), ("b", "Label")], "0", "2"),
        marc_field("880", [("6", "028-01"), ("a", "Alternate-123")], "0", "2"),
    ])
    assert identifier.publisher_number_show(record) == ["9781234567897", "ABC-123 Label", "Alternate-123"]
    assert identifier.publisher_number_search(record) == ["10.1000/xyz123", "9781234567897", "ABC-123"]
    assert identifier.doi_show(record) == ["10.1000/xyz123"]


def test_fingerprint_show(marc_record, marc_field):
    record = marc_record([
        marc_field("026", [("e", "dete nkck vess lodo 3 Anno Domini MDCXXXVI 1636Q"), ("2", "fei"), ("5", "UkCU")]),
    ])
    assert identifier.fingerprint_show(record) == ["dete nkck vess lodo 3 Anno Domini MDCXXXVI 1636Q"]
