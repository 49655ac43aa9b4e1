from marc_indexer.processors import creator


def test_search_gives_both_name_orders(marc_record, marc_field, relator_map):
    record = marc_record([marc_field("100", [("a", "Surname, Name"), ("4", "aut")], "1")])
    assert creator.search(record, relator_map=relator_map) == ["Surname, Name, Author.", "Name Surname, Author."]


def test_search_with_open_date_range(marc_record, marc_field, relator_map):
    record = marc_record([marc_field("100", [("a", "Surname, Name,"), ("d", "1900-"), ("4", "aut")], "1")])
    assert creator.search(record, relator_map=relator_map) == [
        "Surname, Name 1900- Author.", "Name Surname 1900- Author.",
    ]


def test_search_aux_includes_added_entries(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("100", [("a", "Surname, Name")], "1"),
        marc_field("700", [("a", "Added, Person"), ("e", "editor.")], "1"),
    ])
    assert creator.search_aux(record, relator_map=relator_map) == [
        "Surname, Name", "Added, Person, editor.", "Name Surname", "Person Added, editor.",
    ]


def test_show(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("100", [("6", "880-01"), ("a", "Surname, Name"), ("0", "http://id.loc.gov/n1"), ("4", "aut")], "1"),
        marc_field("880", [("6", "100-01"), ("a", "Alternate Name")], "1"),
    ])
    assert creator.show(record, relator_map=relator_map) == ["Surname, Name, Author.", "Alternate Name"]
    assert creator.show_aux(record, relator_map=relator_map) == ["Surname, Name, Author."]


def test_relator_code_takes_priority_over_term(marc_record, marc_field, relator_map):
    record = marc_record([marc_field("100", [("a", "Surname, Name"), ("e", "writer."), ("4", "aut")], "1")])
    assert creator.show(record, relator_map=relator_map) == ["Surname, Name, Author."]


def test_sort_and_facet(marc_record, marc_field):
    record = marc_record([
        marc_field("100", [("a", "Surname, Name,"), ("d", "1900-2000."), ("e", "author.")], "1"),
        marc_field("711", [("a", "Conference"), ("n", "(1st :"), ("d", "2000)"), ("t", "Proceedings")], "2"),
        marc_field("711", [("a", "Meeting"), ("d", "1999"), ("e", "Subunit")], "2"),
    ])
    assert creator.sort(record) == "Surname, Name, 1900-2000."
    # Meeting facets leave out the date.
    assert creator.facet(record) == ["Surname, Name, 1900-2000", "Conference (1st", "Meeting Subunit"]
    assert creator.sort(marc_record()) is None


def test_show_facet_map(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("100", [("a", "Surname, Name,"), ("d", "1900-2000"), ("4", "aut")], "1"),
        marc_field("700", [("a", "Added, Person")], "1"),
    ])
    assert creator.show_facet_map(record, relator_map=relator_map) == {
        "Surname, Name, 1900-2000, Author.": "Surname, Name, 1900-2000",
    }
    assert creator.show_facet_map(marc_record(), relator_map=relator_map) == {}


def test_authors_list(marc_record, marc_field):
    record = marc_record([
        marc_field("100", [("a", "Surname, Name,")], "1"),
        marc_field("700", [("a", "Added, Person")], "1"),
    ])
    assert creator.authors_list(record) == ["Surname, Name", "Added, Person"]
    assert creator.authors_list(record, main_tags_only=True) == ["Surname, Name"]
    assert creator.authors_list(record, first_initial_only=True) == ["Surname, N.", "Added, P."]


def test_conferences(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("111", [("a", "Conference"), ("n", "(1st :"), ("d", "2000)"), ("e", "Subunit")], "2"),
        marc_field("711", [("a", "Other Meeting"), ("j", "host")], "2"),
        marc_field("711", [("a", "Contained Meeting")], "2", "2"),
    ])
    assert creator.conference_show(record, relator_map=relator_map) == ["Conference (1st : 2000) Subunit."]
    assert creator.conference_detail_show(record, relator_map=relator_map) == [
        "Conference (1st : 2000) Subunit", "Other Meeting, host.",
    ]
    assert creator.conference_search(record) == ["Conference 2000) Subunit", "Other Meeting", "Contained Meeting"]


def test_corporate_search(marc_record, marc_field):
    record = marc_record([marc_field("710", [("a", "Corporation."), ("b", "Division."), ("4", "pbl")], "2")])
    assert creator.corporate_search(record) == ["Corporation. Division."]


def test_contributor_show(marc_record, marc_field, relator_map):
    record = marc_record([
        marc_field("700", [("a", "Added, Person"), ("d", "1950-"), ("e", "editor.")], "1"),
        marc_field("700", [("a", "Analytic, Entry")], "1", "2"),
        marc_field("700", [("i", "Adaptation of:"), ("a", "Related, Person")], "1"),
        marc_field("710", [("a", "Corporation"), ("4", "ill")], "2", "0"),
    ])
    assert creator.contributor_show(record, relator_map=relator_map) == [
        "Added, Person 1950- editor.", "Corporation, Illustrator.",
    ]
    assert creator.contributor_show(record, relator_map=relator_map, name_only=True) == [
        "Added, Person, editor.", "Corporation, Illustrator.",
    ]
