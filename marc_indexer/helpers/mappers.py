import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

log = logging.getLogger("marc_indexer")

MAPPINGS_DIR: Path = Path(__file__).resolve().parent.parent / "mappings"


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


class Mappers:
    """
    Read-only lookup tables loaded from the YAML files in the mappings directory. Each table is loaded
    the first time it is asked for, under a lock so that it is only ever read from disk once, and is
    then handed out as an immutable view.

    A process normally uses the shared instance from `default_mappers()`, but extractors accept
    tables as arguments so that tests can pass in their own.
    """
    FILES: dict[str, str] = {
        "relator": "relator.yml",
        "iso_639_2_language": "iso639-2-languages.yml",
        "iso_639_3_language": "iso639-3-languages.yml",
        "loc_classification": "loc_classification.yml",
        "dewey_classification": "dewey_classification.yml",
        "location": "locations.yml",
        "heading_overrides": "headings_override.yml",
        "headings_to_remove": "headings_remove.yml",
    }

    def __init__(self, mappings_dir: Path = MAPPINGS_DIR) -> None:
        self._mappings_dir: Path = mappings_dir
        self._tables: dict[str, Any] = {}
        self._lock = threading.Lock()

    def _get(self, name: str) -> Any:
        # Fast path; once a table is populated it is never replaced.
        if (table := self._tables.get(name)) is not None:
            return table

        with self._lock:
            if name not in self._tables:
                self._tables[name] = _freeze(self._load(self.FILES[name]))
            return self._tables[name]

    def _load(self, filename: str) -> Any:
        path: Path = self._mappings_dir / filename
        log.debug("Loading mapping file %s", path)
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.full_load(fp)

        if data is None:
            log.warning("Mapping file %s was empty.", path)
            return {}

        return data

    @property
    def relator(self) -> Mapping[str, str]:
        return self._get("relator")

    @property
    def iso_639_2_language(self) -> Mapping[str, str]:
        return self._get("iso_639_2_language")

    @property
    def iso_639_3_language(self) -> Mapping[str, str]:
        return self._get("iso_639_3_language")

    @property
    def loc_classification(self) -> Mapping[str, str]:
        return self._get("loc_classification")

    @property
    def dewey_classification(self) -> Mapping[str, str]:
        return self._get("dewey_classification")

    @property
    def location(self) -> Mapping[str, Mapping[str, str]]:
        return self._get("location")

    @property
    def heading_overrides(self) -> Mapping[str, str]:
        return self._get("heading_overrides")

    @property
    def headings_to_remove(self) -> tuple:
        return self._get("headings_to_remove")

    def preload(self) -> None:
        """Eagerly load every table, e.g., before forking worker processes."""
        for name in self.FILES:
            self._get(name)


_default_mappers: Optional[Mappers] = None
_default_lock = threading.Lock()


def default_mappers() -> Mappers:
    global _default_mappers  # noqa: PLW0603

    if _default_mappers is None:
        with _default_lock:
            if _default_mappers is None:
                _default_mappers = Mappers()

    return _default_mappers


def mapping_or_default(mapping: Optional[Any], name: str) -> Any:
    """
    Returns `mapping` if one was passed in, otherwise the named table from the shared instance. Lets
    extractors take an optional table argument that tests can use to inject their own.
    """
    if mapping is not None:
        return mapping

    return getattr(default_mappers(), name)
