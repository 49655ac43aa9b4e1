import threading
from types import MappingProxyType

import pytest

from marc_indexer.helpers.mappers import Mappers, default_mappers, mapping_or_default


@pytest.fixture
def mappings_dir(tmp_path):
    (tmp_path / "relator.yml").write_text("aut: Author\nedt: Editor\n", encoding="utf-8")
    (tmp_path / "locations.yml").write_text(
        "dent:\n  library:\n    - Health Sciences\n    - Dental\n  specific_location: Dental Stacks\n",
        encoding="utf-8",
    )
    (tmp_path / "headings_remove.yml").write_text("- Term one\n- Term two\n", encoding="utf-8")
    return tmp_path


def test_tables_are_read_only(mappings_dir):
    mappers = Mappers(mappings_dir)
    assert mappers.relator["aut"] == "Author"
    assert isinstance(mappers.relator, MappingProxyType)

    with pytest.raises(TypeError):
        mappers.relator["aut"] = "Writer"  # type: ignore[index]


def test_lists_and_nested_mappings_are_frozen(mappings_dir):
    mappers = Mappers(mappings_dir)
    assert mappers.location["dent"]["library"] == ("Health Sciences", "Dental")
    assert mappers.headings_to_remove == ("Term one", "Term two")


def test_tables_are_loaded_once(mappings_dir, monkeypatch):
    mappers = Mappers(mappings_dir)
    calls: list = []
    original = mappers._load

    def counting_load(filename):
        calls.append(filename)
        return original(filename)

    monkeypatch.setattr(mappers, "_load", counting_load)

    threads = [threading.Thread(target=lambda: mappers.relator) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == ["relator.yml"]


def test_shipped_tables_load():
    mappers = default_mappers()
    assert mappers.relator["aut"] == "Author"
    assert mappers.iso_639_2_language["eng"] == "English"
    assert mappers.dewey_classification["6"] == "Technology"
    assert mappers.loc_classification["T"] == "Technology"
    assert default_mappers() is mappers


def test_mapping_or_default(relator_map):
    assert mapping_or_default(relator_map, "relator") is relator_map
    assert mapping_or_default(None, "relator") is default_mappers().relator
