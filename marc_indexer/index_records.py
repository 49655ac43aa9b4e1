import gc
import itertools
import logging
import sys
from collections import deque
from typing import Generator, Iterable, Optional

import orjson
import pymarc

from marc_indexer.exceptions import MalformedIdentifierException, RequiredFieldException
from marc_indexer.helpers.marc import read_marc_file
from marc_indexer.helpers.mappers import default_mappers
from marc_indexer.helpers.profiles import load_profile
from marc_indexer.helpers.registry import default_registry
from marc_indexer.helpers.solr import submit_to_solr
from marc_indexer.helpers.utilities import parallelise, record_id
from marc_indexer.records.bibliographic import create_bib_index_document

log = logging.getLogger("marc_indexer")

DEFAULT_BATCH_SIZE: int = 500
DEFAULT_PROFILE: str = "profiles/bibliographic.yml"


def _get_records(filenames: Iterable[str], only_id: Optional[str] = None) -> Generator[pymarc.Record, None, None]:
    for filename in filenames:
        for record in read_marc_file(filename):
            if only_id and record_id(record) != only_id:
                continue
            yield record


def _batches(records: Iterable[pymarc.Record], size: int) -> Generator[list, None, None]:
    # Records are sent to the worker processes as binary MARC, since pymarc objects are slow to pickle.
    iterator = iter(records)
    while batch := list(itertools.islice(iterator, size)):
        yield [r.as_marc() for r in batch]


def index_records(filenames: list[str], cfg: dict) -> bool:
    log.info("Indexing bibliographic records")
    # Checked here, once, rather than in each worker.
    profile: dict = load_profile(cfg["indexing"].get("profile", DEFAULT_PROFILE), default_registry())
    default_mappers().preload()

    batch_size: int = cfg["indexing"].get("batch_size", DEFAULT_BATCH_SIZE)
    record_groups = _batches(_get_records(filenames, cfg.get("id")), batch_size)

    return parallelise(record_groups, index_record_groups, profile, cfg)


def index_record_groups(records: list[bytes], profile: dict, cfg: dict) -> bool:
    log.info("Indexing record group")
    records_to_index: deque = deque()
    registry = default_registry()

    for raw in records:
        record: pymarc.Record = pymarc.Record(data=raw, to_unicode=True, force_utf8=True)
        try:
            doc: dict = create_bib_index_document(record, profile, registry)
        except (RequiredFieldException, MalformedIdentifierException) as e:
            log.critical("Could not index record %s: %s", record_id(record), e)
            continue
        log.debug("Appending bibliographic document")
        records_to_index.append(doc)

    records_list: list = list(records_to_index)

    if cfg["dry"]:
        # dry runs always return success.
        for doc in records_list:
            sys.stdout.write(orjson.dumps(doc).decode("utf-8") + "\n")
        check = True
    else:
        check = submit_to_solr(records_list, cfg)

    if not check:
        log.error("There was an error submitting records to Solr")

    del records
    del records_to_index
    del records_list
    gc.collect()

    return check
