import logging
from typing import Optional

import pymarc

from marc_indexer.exceptions import RequiredFieldException
from marc_indexer.helpers.profiles import process_marc_profile
from marc_indexer.helpers.registry import Registry, default_registry
from marc_indexer.helpers.utilities import normalize_id, record_id

log = logging.getLogger("marc_indexer")


def create_bib_index_document(record: pymarc.Record, profile: dict, registry: Optional[Registry] = None) -> dict:
    """
    Builds a Solr document for a bibliographic record. The id comes from the 001; every other field
    comes from the profile.

    :param record: A pymarc.Record
    :param profile: A field profile, as returned by `load_profile`
    :param registry: The registry the profile's processors are looked up in; defaults to the shared one
    :return: A Solr document
    :raises RequiredFieldException: if the record has no usable 001.
    """
    raw_id: Optional[str] = record_id(record)
    if not raw_id:
        raise RequiredFieldException("The record does not have a 001 and cannot be indexed.")

    mms_id: str = normalize_id(raw_id)
    doc_id: str = f"bib_{mms_id}"

    core_bib: dict = {
        "id": doc_id,
        "type": "bibliographic",
        "mms_id": mms_id,
    }

    additional_fields: dict = process_marc_profile(profile, doc_id, record, registry or default_registry())
    core_bib.update(additional_fields)

    return core_bib
