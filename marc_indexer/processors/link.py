"""
Electronic location and access (856). Links are returned as dictionaries of link text and URL, for
the JSON-typed fields of the index.

See: https://www.loc.gov/marc/bibliographic/bd856.html
"""
import logging
from typing import Iterable, Optional, TypedDict

import pymarc

from marc_indexer.helpers.field_kinds import LINK_TAG, LinkKind, link_kind
from marc_indexer.helpers.punctuation import join_and_squish, join_subfields
from marc_indexer.helpers.registry import extractor
from marc_indexer.helpers.subfields import subfield_in, subfield_values

log = logging.getLogger("marc_indexer")

# Some URLs were catalogued with HTML attributes trailing them.
TARGET_ATTRIBUTE: str = " target=_blank"


class Link(TypedDict):
    link_text: str
    link_url: str


def _link(field: pymarc.Field) -> Link:
    """
    The link text is the materials specified ($3) followed by the first public note ($z) or link
    text ($y); with neither, the URL is used as the text.
    """
    materials: str = join_subfields(field, subfield_in(("3",)))
    notes: list[str] = [sf.value for sf in field.subfields if sf.code in ("z", "y") and sf.value]
    link_text: str = join_and_squish((materials, notes[0] if notes else None))

    urls: list[str] = subfield_values(field, "u")
    link_url: str = urls[0].replace(TARGET_ATTRIBUTE, "").strip() if urls else ""

    return {"link_text": link_text or link_url, "link_url": link_url}


def _links(record: pymarc.Record, kinds: Iterable[LinkKind]) -> list[Link]:
    wanted: frozenset = frozenset(kinds)
    links: list[Link] = []
    for field in record.get_fields(LINK_TAG):
        kind: Optional[LinkKind] = link_kind(field)
        if kind not in wanted:
            continue

        link: Link = _link(field)
        if link not in links:
            links.append(link)

    return links


@extractor("link", "full_text")
def full_text(record: pymarc.Record) -> list[Link]:
    """Links to the resource itself, or to a version of it."""
    return _links(record, (LinkKind.RESOURCE, LinkKind.VERSION))


@extractor("link", "web")
def web(record: pymarc.Record) -> list[Link]:
    """Links to related resources, or links whose relationship was not given."""
    return _links(record, (LinkKind.RELATED, LinkKind.UNSPECIFIED))
