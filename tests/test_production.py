from marc_indexer.processors import production


def _statement(marc_field, ind2, place, name, date):
    return marc_field("264", [("a", place), ("b", name), ("c", date)], " ", ind2)


def test_statements_by_function(marc_record, marc_field):
    record = marc_record([
        _statement(marc_field, "0", "Place :", "Producer,", "2000."),
        _statement(marc_field, "2", "Place :", "Distributor,", "2001."),
        _statement(marc_field, "3", "Place :", "Manufacturer,", "2002."),
    ])
    assert production.show(record) == ["Place : Producer, 2000."]
    assert production.distribution_show(record) == ["Place : Distributor, 2001."]
    assert production.manufacture_show(record) == ["Place : Manufacturer, 2002."]


def test_publication_values_from_264(marc_record, marc_field):
    record = marc_record([
        _statement(marc_field, "1", "New York :", "Publisher,", "2000."),
        marc_field("264", [("c", "©1999")], " ", "4"),
    ])
    assert production.publication_values(record) == ["New York : Publisher, 2000., ©1999"]


def test_publication_values_with_only_copyright(marc_record, marc_field):
    record = marc_record([marc_field("264", [("c", "©1999")], " ", "4")])
    assert production.publication_values(record) == ["©1999"]


def test_publication_values_prefers_260(marc_record, marc_field):
    record = marc_record([
        marc_field("245", [("a", "Papers,"), ("f", "1900-1950.")], "1", "0"),
        marc_field("260", [("6", "880-01"), ("a", "Place :"), ("b", "Pub,"), ("c", "1990.")]),
        _statement(marc_field, "1", "New York :", "Publisher,", "2000."),
    ])
    assert production.publication_values(record) == ["1900-1950.", "Place : Pub, 1990."]


def test_publication_show(marc_record, marc_field):
    record = marc_record([
        marc_field("260", [("6", "880-01"), ("a", "Place :"), ("b", "Pub,"), ("c", "1990.")]),
        marc_field("880", [("6", "260-01"), ("a", "Alternate Place :"), ("b", "Alternate Pub")]),
        _statement(marc_field, "1", "New York :", "Publisher,", "2000."),
    ])
    assert production.publication_show(record) == [
        "Place : Pub, 1990.", "Alternate Place : Alternate Pub", "New York : Publisher, 2000.",
    ]


def test_search(marc_record, marc_field):
    record = marc_record([
        marc_field("260", [("a", "Place :"), ("b", "Pub,")]),
        _statement(marc_field, "1", "New York :", "Publisher,", "2000."),
        _statement(marc_field, "3", "Elsewhere :", "Printer,", "2000."),
    ])
    assert production.search(record) == ["Pub,", "Publisher,"]
    assert production.place_of_publication_search(record) == ["Place :", "New York :"]


def test_place_of_publication(marc_record, marc_field):
    record = marc_record([
        marc_field("752", [("a", "United States"), ("b", "New York"), ("e", "publication place"), ("d", "New York")]),
    ])
    assert production.place_of_publication_show(record) == ["United States New York New York publication place"]
    assert production.place_of_publication_search(record) == ["United States New York New York"]
