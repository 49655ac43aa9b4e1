import pytest

from marc_indexer.exceptions import InvalidArgumentException
from marc_indexer.helpers.punctuation import (
    Trailer,
    append_trailing,
    join_and_squish,
    join_subfields,
    squish,
    substring_after,
    substring_before,
    trim_punctuation,
    trim_trailing,
)
from marc_indexer.helpers.subfields import subfield_in


@pytest.mark.parametrize("kind,value,expected", [
    (Trailer.COMMA, "Name, Some,", "Name, Some"),
    (Trailer.COMMA, "Name, Some , , ", "Name, Some"),
    (Trailer.SLASH, "Title /", "Title"),
    (Trailer.COLON, "Title :", "Title"),
    (Trailer.SEMICOLON, "Title ;", "Title"),
    (Trailer.EQUAL, "Title =", "Title"),
    (Trailer.PERIOD, "Title.", "Title"),
    (Trailer.PERIOD, "Smith, J.", "Smith, J."),
    ("comma", "Name,", "Name"),
])
def test_trim_trailing(kind, value, expected):
    assert trim_trailing(kind, value) == expected


@pytest.mark.parametrize("kind", list(Trailer))
@pytest.mark.parametrize("value", ["Title ;;", "Title : :", "Title = =", "Title //", "Name,, ,", "Books..", "Plain"])
def test_trim_trailing_is_idempotent(kind, value):
    once = trim_trailing(kind, value)
    assert trim_trailing(kind, once) == once


def test_trim_trailing_rejects_unknown_kind():
    with pytest.raises(InvalidArgumentException):
        trim_trailing("ellipsis", "Title...")


def test_append_trailing():
    assert append_trailing(Trailer.PERIOD, "Author") == "Author."
    assert append_trailing(Trailer.PERIOD, "Author.") == "Author."
    assert append_trailing(Trailer.PERIOD, "1900-") == "1900-"
    assert append_trailing(Trailer.COMMA, "Name") == "Name,"


def test_append_trailing_leaves_blank_values_alone():
    assert append_trailing(Trailer.PERIOD, "") == ""
    assert append_trailing(Trailer.PERIOD, "   ") == "   "
    assert append_trailing(Trailer.PERIOD, None) == ""


def test_join_subfields_skips_blanks_and_squishes(marc_field):
    field = marc_field("245", [("a", "  Five   Decades "), ("b", "  "), ("n", "Part One"), ("c", "Ignored")])
    assert join_subfields(field, subfield_in("abn")) == "Five Decades Part One"


def test_join_subfields_is_empty_when_nothing_selected(marc_field, marc_control_field):
    field = marc_field("245", [("a", "Title")])
    assert join_subfields(field, subfield_in("z")) == ""
    assert join_subfields(marc_control_field("001", "123"), subfield_in("a")) == ""
    assert join_subfields(None, subfield_in("a")) == ""


def test_squish_and_join():
    assert squish("  a \n b\t c ") == "a b c"
    assert squish(None) == ""
    assert join_and_squish(["a", None, " ", "b  c"]) == "a b c"
    assert join_and_squish(["a", "b"], separator=" -- ") == "a -- b"


@pytest.mark.parametrize("value,expected", [
    ("Cooking,", "Cooking"),
    ("History.", "History"),
    ("Smith, J.", "Smith, J."),
    ("[Philadelphia", "Philadelphia"),
    ("Philadelphia]", "Philadelphia"),
    ("(Firm", "Firm"),
    ("Firm)", "Firm"),
    ("Title /", "Title"),
])
def test_trim_punctuation(value, expected):
    assert trim_punctuation(value) == expected


def test_substrings():
    assert substring_before("Surname, Name", ", ") == "Surname"
    assert substring_after("Surname, Name", ", ") == "Name"
    assert substring_after("Surname", ", ") == ""
