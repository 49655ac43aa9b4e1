"""
A ranking of records by their encoding level (leader/17), so that fuller descriptions sort first.

See: https://www.loc.gov/marc/bibliographic/bdleader.html and
https://www.oclc.org/bibformats/en/fixedfield/elvl.html
"""
import logging
from typing import Optional

import pymarc

from marc_indexer.helpers.registry import extractor

log = logging.getLogger("marc_indexer")

ENCODING_LEVEL_POSITION: int = 17

# Lower ranks are fuller records. Full and core levels are not told apart. The letter codes are
# OCLC's, some of them obsolete but still found in older records.
ENCODING_LEVEL_RANK: dict[str, int] = {
    " ": 0,   # full
    "1": 0,   # full, material not examined
    "I": 0,   # OCLC full
    "4": 0,   # core
    "2": 4,   # less than full, material not examined
    "3": 5,   # abbreviated
    "5": 6,   # partial (preliminary)
    "7": 7,   # minimal
    "K": 8,   # OCLC minimal
    "M": 9,   # OCLC batch
    "L": 10,  # OCLC batch, legacy
    "J": 11,  # OCLC deleted
}


@extractor("encoding", "level_sort")
def level_sort(record: pymarc.Record) -> Optional[int]:
    """
    :param record: A pymarc.Record
    :return: The rank of the encoding level, or None for levels that are not ranked, e.g., "u" or "z".
    """
    leader: str = str(record.leader or "")
    if len(leader) <= ENCODING_LEVEL_POSITION:
        return None

    return ENCODING_LEVEL_RANK.get(leader[ENCODING_LEVEL_POSITION])
