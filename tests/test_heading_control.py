from marc_indexer.helpers.heading_control import has_local_prefix, prefixed_headings, source_allowed, term_override

REMOVE: tuple = ("Alien criminals",)
OVERRIDES: dict = {"illegal aliens": "Undocumented immigrants", "aliens": "Noncitizens"}


def test_term_override_removes_and_replaces():
    values = ["Alien criminals -- United States", "Illegal aliens -- Legal status", "Aliens", "Cats"]
    assert term_override(values, REMOVE, OVERRIDES) == [
        "Undocumented immigrants -- Legal status", "Noncitizens", "Cats",
    ]


def test_term_override_with_empty_tables():
    assert term_override(["Cats"], [], {}) == ["Cats"]


def test_source_allowed(marc_field):
    assert source_allowed(marc_field("655", [("a", "Magazine"), ("2", "aat")], indicator2="7"))
    assert not source_allowed(marc_field("655", [("a", "Astronomy"), ("2", "zzzz")], indicator2="7"))


def test_local_prefix(marc_field):
    assert has_local_prefix(marc_field("650", [("a", "PRO Heading")], indicator2="4"))
    assert has_local_prefix(marc_field("650", [("a", "CHR Heading")], indicator2="4"), "CHR")
    assert not has_local_prefix(marc_field("650", [("a", "PROVENANCE")], indicator2="4"))


def test_prefixed_headings(marc_record, marc_field):
    record = marc_record([
        marc_field("650", [("a", "PRO Heading"), ("y", "19th century.")], indicator2="4"),
        marc_field("650", [("a", "PRO Not local")], indicator2="0"),
        marc_field("650", [("a", "Regular Local Heading")], indicator2="4"),
        marc_field("880", [("6", "650-01"), ("a", "PRO Alt Heading")], indicator2="4"),
    ])
    assert prefixed_headings(record, "PRO") == ["Heading 19th century", "Alt Heading"]
