"""
Extractors are plain functions in the `marc_indexer.processors` modules that take a pymarc.Record
(plus optional keyword arguments for injected lookup tables) and return a string, a list, a dict
or None. Each one is registered here under a "<domain>.<operation>" key, e.g., "title.show", and
field profiles refer to extractors by that key.
"""
import importlib
import logging
import threading
from typing import Callable, Iterator, Optional

from marc_indexer.exceptions import InvalidArgumentException

log = logging.getLogger("marc_indexer")

Extractor = Callable[..., object]

PROCESSOR_MODULES: tuple = (
    "marc_indexer.processors.access",
    "marc_indexer.processors.classification",
    "marc_indexer.processors.creator",
    "marc_indexer.processors.database",
    "marc_indexer.processors.date",
    "marc_indexer.processors.edition",
    "marc_indexer.processors.encoding",
    "marc_indexer.processors.format",
    "marc_indexer.processors.genre",
    "marc_indexer.processors.identifier",
    "marc_indexer.processors.language",
    "marc_indexer.processors.link",
    "marc_indexer.processors.location",
    "marc_indexer.processors.note",
    "marc_indexer.processors.production",
    "marc_indexer.processors.relation",
    "marc_indexer.processors.series",
    "marc_indexer.processors.subject",
    "marc_indexer.processors.title",
)


def _key(domain: str, operation: str) -> str:
    if not domain or not operation or "." in domain or "." in operation:
        raise InvalidArgumentException(f"'{domain}' and '{operation}' cannot be used as an extractor key.")

    return f"{domain}.{operation}"


class Registry:
    def __init__(self) -> None:
        self._extractors: dict[str, Extractor] = {}

    def register(self, domain: str, operation: str, func: Extractor) -> Extractor:
        key: str = _key(domain, operation)
        if key in self._extractors:
            raise InvalidArgumentException(f"An extractor is already registered for {key}.")

        self._extractors[key] = func
        return func

    def extractor(self, domain: str, operation: str) -> Callable[[Extractor], Extractor]:
        """
        Decorator form of `register`:

            @registry.extractor("title", "show")
            def show(record: pymarc.Record) -> str: ...
        """
        def decorator(func: Extractor) -> Extractor:
            return self.register(domain, operation, func)

        return decorator

    def get(self, key: str) -> Extractor:
        """
        :raises InvalidArgumentException: if nothing is registered under `key`.
        """
        try:
            return self._extractors[key]
        except KeyError as err:
            raise InvalidArgumentException(f"No extractor is registered for {key}.") from err

    def __contains__(self, key: str) -> bool:
        return key in self._extractors

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._extractors))

    def __len__(self) -> int:
        return len(self._extractors)


# Processor modules register themselves against this instance when they are imported.
registry = Registry()
extractor = registry.extractor

_loaded: bool = False
_load_lock = threading.Lock()


def default_registry(modules: Optional[tuple] = None) -> Registry:
    """
    The shared registry with every processor module imported, so that all extractors are present.
    """
    global _loaded  # noqa: PLW0603

    if not _loaded:
        with _load_lock:
            if not _loaded:
                for module_name in modules or PROCESSOR_MODULES:
                    log.debug("Loading extractors from %s", module_name)
                    importlib.import_module(module_name)
                _loaded = True

    return registry
