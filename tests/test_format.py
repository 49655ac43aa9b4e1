from marc_indexer.processors import format as format_processor


def test_other_show(marc_record, marc_field):
    record = marc_record([
        marc_field("776", [("6", "880-01"), ("i", "Online version:"), ("a", "Author, Name."), ("t", "Some Title"),
                           ("w", "(OCoLC)123")], "0", "8"),
        marc_field("880", [("6", "776-01"), ("i", "Online version:"), ("t", "Alternate Title")], "0", "8"),
    ])
    assert format_processor.other_show(record) == [
        "Online version: Author, Name. Some Title", "Online version: Alternate Title",
    ]
