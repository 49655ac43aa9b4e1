"""
Languages of a record. Coded values come from the 041 or, when there is none, from 008/35-37; both
are mapped to display names. The 546 note is shown as it is.
"""
import logging
from typing import Mapping, Optional

import pymarc

from marc_indexer.helpers.linkage import NOT_LINKAGE_SUBFIELDS, linked_alternate_not_6_or_8
from marc_indexer.helpers.mappers import mapping_or_default
from marc_indexer.helpers.punctuation import join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_value_in
from marc_indexer.helpers.utilities import unique

log = logging.getLogger("marc_indexer")

LANGUAGE_CODE_TAG: str = "041"
LANGUAGE_NOTE_TAG: str = "546"
# Language of the text, summary and sung or spoken text.
LANGUAGE_CODE_SUBFIELDS: tuple = ("a", "b", "d")
ISO_639_3_SOURCE: str = "iso639-3"
UNDETERMINED_CODE: str = "und"


def _fixed_field_code(record: pymarc.Record) -> Optional[str]:
    fields: list[pymarc.Field] = record.get_fields("008")
    if not fields or not fields[0].data:
        return None

    code: str = fields[0].data[35:38].strip()
    return code if len(code) == 3 else None


@extractor("language", "show")
def show(record: pymarc.Record) -> list[str]:
    """Language notes (546) and their linked alternates."""
    values: list[str] = [join_subfields(f, NOT_LINKAGE_SUBFIELDS) for f in record.get_fields(LANGUAGE_NOTE_TAG)]
    values += linked_alternate_not_6_or_8(record, LANGUAGE_NOTE_TAG)
    return unique(values)


@extractor("language", "search")
def search(record: pymarc.Record,
           iso_639_2_mapping: Optional[Mapping[str, str]] = None,
           iso_639_3_mapping: Optional[Mapping[str, str]] = None) -> list[str]:
    """
    Language names for searching and faceting. Codes in the 041 are ISO 639-2 unless the field's $2
    says they are ISO 639-3. If the 041 gives nothing, the code in 008/35-37 is used and, if that is
    missing too, "und" (Undetermined).

    :param record: A pymarc.Record
    :param iso_639_2_mapping: ISO 639-2 codes to names; defaults to the shared table
    :param iso_639_3_mapping: ISO 639-3 codes to names; defaults to the shared table
    :return: A list of language names
    """
    iso_639_2: Mapping[str, str] = mapping_or_default(iso_639_2_mapping, "iso_639_2_language")
    iso_639_3: Mapping[str, str] = mapping_or_default(iso_639_3_mapping, "iso_639_3_language")

    values: list[str] = []
    for field in record.get_fields(LANGUAGE_CODE_TAG):
        mapping: Mapping[str, str] = iso_639_3 if subfield_value_in(field, "2", (ISO_639_3_SOURCE,)) else iso_639_2
        for sf in field.subfields:
            if sf.code not in LANGUAGE_CODE_SUBFIELDS or not sf.value:
                continue
            if name := mapping.get(sf.value.strip().lower()):
                values.append(name)
            else:
                log.debug("No language found for code %s", sf.value)

    if values:
        return unique(values)

    code: str = _fixed_field_code(record) or UNDETERMINED_CODE
    name: Optional[str] = iso_639_2.get(code) or iso_639_2.get(UNDETERMINED_CODE)
    return [name] if name else []
