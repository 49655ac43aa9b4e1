from marc_indexer.processors import relation


def test_contained_in_show(marc_record, marc_field):
    record = marc_record([marc_field("773", [("t", "Host Title"), ("g", "p. 1-10"), ("w", "(OCoLC)123")], "0")])
    assert relation.contained_in_show(record) == ["Host Title p. 1-10"]


def test_chronology_show(marc_record, marc_field):
    record = marc_record([
        marc_field("650", [("a", "CHR 1900s")], " ", "4"),
        marc_field("650", [("a", "PRO Not Chronology")], " ", "4"),
    ])
    assert relation.chronology_show(record) == ["1900s"]


def test_related_work_show(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("700", [("i", "Adaptation of (work):"), ("a", "Author, Name,"), ("t", "Title"), ("4", "ill")], "1"),
        marc_field("700", [("a", "Added, Person")], "1"),
        marc_field("700", [("a", "Analytic, Name."), ("t", "Contained Work.")], "1", "2"),
    ])
    assert relation.related_work_show(record, relator_map=relator_map) == [
        "Adaptation of: Author, Name, Title, Illustrator",
    ]


def test_contains_show(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("700", [("a", "Analytic, Name."), ("t", "Contained Work."), ("0", "http://id.loc.gov/n1")], "1", "2"),
        marc_field("740", [("a", "Contained Title")], "0", "2"),
        marc_field("740", [("a", "Other Title")], "0"),
    ])
    assert relation.contains_show(record, relator_map=relator_map) == [
        "Analytic, Name. Contained Work.", "Contained Title",
    ]


def test_constituent_unit_and_supplement(marc_record, marc_field):
    record = marc_record([
        marc_field("774", [("i", "Container of:"), ("t", "Unit Title"), ("w", "(OCoLC)456")], "0", "8"),
        marc_field("770", [("t", "Supplement Title"), ("x", "1234-5678")], "0"),
    ])
    assert relation.constituent_unit_show(record) == ["Container of: Unit Title"]
    assert relation.has_supplement_show(record) == ["Supplement Title 1234-5678"]


def test_related_collections_and_publications_about(marc_record, marc_field):
    record = marc_record([
        marc_field("544", [("a", "Other papers held elsewhere.")]),
        marc_field("581", [("a", "Described in: Some catalogue.")]),
    ])
    assert relation.related_collections_show(record) == ["Other papers held elsewhere."]
    assert relation.publications_about_show(record) == ["Described in: Some catalogue."]
