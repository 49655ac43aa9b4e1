import pytest

from marc_indexer.exceptions import InvalidArgumentException
from marc_indexer.helpers.registry import Registry, default_registry


def test_register_and_get():
    registry = Registry()

    @registry.extractor("title", "show")
    def show(record):
        return "A title"

    assert "title.show" in registry
    assert registry.get("title.show") is show
    assert len(registry) == 1
    assert list(registry) == ["title.show"]


def test_duplicate_registration_is_rejected():
    registry = Registry()
    registry.register("title", "show", lambda record: None)

    with pytest.raises(InvalidArgumentException):
        registry.register("title", "show", lambda record: None)


@pytest.mark.parametrize("domain,operation", [("", "show"), ("title", ""), ("title.main", "show")])
def test_bad_keys_are_rejected(domain, operation):
    with pytest.raises(InvalidArgumentException):
        Registry().register(domain, operation, lambda record: None)


def test_unknown_key():
    with pytest.raises(InvalidArgumentException):
        Registry().get("title.nothing")


@pytest.mark.parametrize("key", [
    "access.facet",
    "classification.facet",
    "creator.search_aux",
    "database.subcategory",
    "date.publication_range",
    "edition.other_show",
    "encoding.level_sort",
    "format.other_show",
    "genre.facet",
    "identifier.isxn_search",
    "language.search",
    "link.full_text",
    "location.specific_location",
    "note.provenance_show",
    "production.publication_values",
    "relation.chronology_show",
    "series.continued_by_show",
    "subject.local_show",
    "title.sort",
])
def test_default_registry_loads_every_processor_module(key):
    assert key in default_registry()
