import logging
from pathlib import Path
from typing import Iterator, Optional

import pymarc

log = logging.getLogger("marc_indexer")

LEADER_TAG: str = "LDR"
# Mnemonic files use either a backslash or a hash for a blank indicator.
BLANK_INDICATORS: tuple = ("\\", "#")


def _parse_indicator(ind: str) -> str:
    return " " if not ind or ind in BLANK_INDICATORS else ind


def _parse_field(line: str) -> pymarc.Field:
    # General format: =TAG  ##$afoo$bbar
    tag_value: str = line[1:4]

    # Control fields are those in the <010 range. They do not have
    # subfields, but have the data encoded in them directly.
    control: bool = tag_value.isdigit() and int(tag_value) < 10
    if control:
        return pymarc.Field(tag=tag_value, data=line[6:].replace("\\", " "))

    ind_value: str = line[6:8].ljust(2)
    indicators: list = [_parse_indicator(i) for i in ind_value]
    sub_value: str = line[8:]
    subf_list: list = sub_value.split("$") if sub_value else []
    subfields: list[pymarc.Subfield] = [_parse_subf(itm) for itm in subf_list if itm != '']
    return pymarc.Field(tag=tag_value, indicators=indicators, subfields=subfields)


def _parse_subf(subf_value: str) -> pymarc.Subfield:
    code: str = subf_value[0]
    value: str = subf_value[1:].strip()

    if "{dollar}" in value:
        value = value.replace("{dollar}", "$")

    return pymarc.Subfield(code, value)


def create_marc(record: str) -> pymarc.Record:
    """
    Creates a pymarc Record from a record in MARC mnemonic ("MRK") text, one field per line:

        =LDR  00000nam a2200000 a 4500
        =001  9977233551603681
        =245  10$aFive Decades of MARC usage$nPart One

    :param record: A single record in mnemonic form
    :return: an instance of a pymarc.Record
    """
    lines: list = [line.rstrip("\r") for line in record.split("\n")]
    p_record: pymarc.Record = pymarc.Record()

    fields: list[pymarc.Field] = []
    for line in lines:
        if not line or not line.startswith("="):
            continue

        if line[1:4] == LEADER_TAG:
            p_record.leader = pymarc.Leader(line[6:].replace("\\", " ").ljust(24)[:24])
            continue

        fields.append(_parse_field(line))

    p_record.add_field(*fields)

    return p_record


def create_marc_list(marc_records: Optional[str]) -> list[pymarc.Record]:
    """
    Will always return a list, potentially an empty one.

    :param marc_records: A string of mnemonic records separated by blank lines
    :return: A list of pymarc.Record objects
    """
    if not marc_records:
        return []

    return [create_marc(rec.strip()) for rec in marc_records.split("\n\n") if rec.strip()]


def _read_binary(path: Path) -> Iterator[pymarc.Record]:
    with path.open("rb") as fh:
        reader = pymarc.MARCReader(fh, to_unicode=True, force_utf8=True)
        for record in reader:
            if record is None:
                log.warning("Could not read a record from %s: %s", path, reader.current_exception)
                continue
            yield record


def read_marc_file(filename: str) -> Iterator[pymarc.Record]:
    """
    Reads all the records from a file, choosing the reader from the file extension: ".xml" for
    MARCXML, ".mrk" or ".txt" for mnemonic text, and anything else as binary MARC.

    :param filename: Path to a MARC file
    :return: A generator of pymarc.Record objects
    """
    path: Path = Path(filename)
    suffix: str = path.suffix.lower()
    log.info("Reading MARC records from %s", path)

    if suffix == ".xml":
        yield from pymarc.parse_xml_to_array(str(path))
    elif suffix in (".mrk", ".txt"):
        yield from create_marc_list(path.read_text(encoding="utf-8"))
    else:
        yield from _read_binary(path)
