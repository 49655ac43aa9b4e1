import datetime
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import orjson
import pymarc
import yaml

from marc_indexer.exceptions import InvalidArgumentException, RequiredFieldException
from marc_indexer.helpers.registry import Registry
from marc_indexer.helpers.utilities import (
    to_solr_multi,
    to_solr_multi_required,
    to_solr_single,
    to_solr_single_required,
)

log = logging.getLogger("marc_indexer")

SOLR_DATE_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"


def load_profile(filename: str, registry: Registry) -> dict:
    """
    Loads a field profile and checks that every processor it names is registered, so that a typo
    in the profile fails once at start-up rather than on every record.

    :param filename: Path to a YAML profile
    :param registry: The registry the profile's processors are looked up in
    :return: The profile, as a dictionary of Solr field name to field configuration.
    :raises InvalidArgumentException: if a processor is not registered, or a field has no source.
    """
    with Path(filename).open("r", encoding="utf-8") as fp:
        profile: Optional[dict] = yaml.full_load(fp)

    if not profile:
        raise InvalidArgumentException(f"The profile {filename} is empty.")

    for solr_field, field_config in profile.items():
        if "processor" in field_config:
            # raises if the key is unknown.
            registry.get(field_config["processor"])
        elif "value" not in field_config and "field" not in field_config:
            raise InvalidArgumentException(f"{solr_field} in {filename} needs a processor, field, or value.")

    log.debug("Loaded profile %s with %s fields", filename, len(profile))
    return profile


def _is_empty(result: Any) -> bool:
    return result is None or result == "" or result == [] or result == {}


def _solr_value(result: Any) -> Any:
    # Solr date fields need the UTC "Z" form; extractors give naive datetimes.
    if isinstance(result, datetime.datetime):
        return result.strftime(SOLR_DATE_FORMAT)

    return result


def process_marc_profile(cfg: dict, doc_id: str, marc: pymarc.Record, registry: Registry) -> dict:
    solr_document: dict = {}

    for solr_field, field_config in cfg.items():
        multiple: bool = field_config.get("multiple", False)
        required: bool = field_config.get("required", False)

        if 'value' in field_config:
            # If we have a static value, simply set the field to the static value
            # and move on.
            solr_document[solr_field] = field_config['value']
        elif 'processor' in field_config:
            # a processor function is configured for this field.
            to_json: bool = field_config.get("json", False)
            processor_fn: Callable = registry.get(field_config['processor'])
            field_result: Any = processor_fn(marc)

            if _is_empty(field_result):
                if required:
                    log.critical("%s requires a value, but one was not found for %s. Skipping this field.",
                                 solr_field, doc_id)
                # don't bother to add this to the result, since it would
                # get stripped out anyway.
                continue

            if to_json:
                field_result = orjson.dumps(field_result).decode("utf-8")

            solr_document[solr_field] = _solr_value(field_result)
        else:
            sortout: bool = field_config.get("sorted", True)

            # these will explode if the configuration is not correct.
            marc_field = field_config['field']
            marc_subfield = field_config.get('subfield')

            field_fn: Callable
            if required and multiple:
                field_fn = to_solr_multi_required
            elif not required and multiple:
                field_fn = to_solr_multi
            elif required and not multiple:
                field_fn = to_solr_single_required
            else:
                # not required and not multiple, default.
                field_fn = to_solr_single

            try:
                field_result = field_fn(marc, marc_field, marc_subfield, sortout)
            except RequiredFieldException:
                log.critical("%s requires a value, but one was not found for %s. Skipping this field.",
                             solr_field, doc_id)
                continue

            if field_result is None:
                # For values of 'None' we would expect this field to not appear in the
                # document anyway, so we just skip any further processing or adding
                # this value to the result document.
                continue

            if 'value_prefix' in field_config:
                if isinstance(field_result, list):
                    solr_document[solr_field] = [f"{field_config['value_prefix']}{v}" for v in field_result]
                else:
                    solr_document[solr_field] = f"{field_config['value_prefix']}{field_result}"
            else:
                solr_document[solr_field] = field_result

    return solr_document
