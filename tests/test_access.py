from marc_indexer.processors import access


def test_physical_and_electronic(marc_record, marc_field):
    record = marc_record([
        marc_field("prt", [("a", "53496697910003681")]),
        marc_field("hld", [("c", "vanp")], "0"),
    ])
    assert access.facet(record) == ["At the library", "Online"]


def test_api_inventory(marc_record, marc_field):
    assert access.facet(marc_record([marc_field("AVA", [("b", "VanPeltLib")])])) == ["At the library"]
    assert access.facet(marc_record([marc_field("AVE", [("l", "Main")])])) == ["Online"]


def test_finding_aid_link(marc_record, marc_field):
    url: str = "http://hdl.library.upenn.edu/1017/d/pacscl/UPENN_RBML_MsColl200"
    related = marc_field("856", [("u", url), ("z", "Finding aid")], "4", "2")
    assert access.facet(marc_record([related])) == []

    version = marc_field("856", [("u", url), ("z", "Finding aid")], "4", "1")
    assert access.facet(marc_record([version])) == ["Online"]


def test_no_access(marc_record, marc_field):
    record = marc_record([marc_field("856", [("u", "https://example.com"), ("z", "Finding aid")], "4", "1")])
    assert access.facet(record) == []
