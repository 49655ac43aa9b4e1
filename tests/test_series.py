from marc_indexer.processors import series


def _series_record(marc_record, marc_field):
    return marc_record([
        marc_field("490", [("a", "Series statement ;"), ("v", "v. 1")], "1"),
        marc_field("800", [("a", "Surname, Name."), ("t", "Series Title ;"), ("v", "v. 1."), ("4", "aut")], "1"),
        marc_field("533", [("a", "Microfilm."), ("f", "(Series of reproductions ; no. 5)")]),
    ])


def test_show(marc_record, marc_field, relator_map):
    record = _series_record(marc_record, marc_field)
    assert series.show(record, relator_map=relator_map) == [
        "Surname, Name. Series Title ; v. 1., Author", "Series statement ; v. 1",
    ]


def test_show_with_only_linked_alternates(marc_record, marc_field):
    record = marc_record([marc_field("880", [("6", "490-01"), ("a", "Alternate Series")], "0")])
    assert series.show(record) == ["Alternate Series"]


def test_values(marc_record, marc_field, relator_map):
    record = _series_record(marc_record, marc_field)
    assert series.values(record, relator_map=relator_map) == ["Surname, Name. Series Title ; v. 1., Author."]

    statement_only = marc_record([marc_field("490", [("a", "Series statement ;"), ("v", "v. 1")], "0")])
    assert series.values(statement_only, relator_map=relator_map) == ["Series statement ; v. 1."]
    assert series.values(marc_record(), relator_map=relator_map) == []


def test_search(marc_record, marc_field):
    record = _series_record(marc_record, marc_field)
    record.add_field(marc_field("400", [("a", "Pronoun Series"), ("t", "Title")], "1", "1"))
    assert series.search(record) == [
        "Pronoun Series Title",
        "Surname, Name. Series Title ; v. 1.",
        "Series of reproductions ; no. 5",
    ]


def test_continues_and_continued_by(marc_record, marc_field):
    record = marc_record([
        marc_field("780", [("t", "Earlier Serial"), ("x", "1234-5678")], "0", "0"),
        marc_field("785", [("t", "Later Serial"), ("w", "(OCoLC)123")], "0", "0"),
    ])
    assert series.continues_show(record) == ["Earlier Serial"]
    assert series.continued_by_show(record) == ["Later Serial"]
