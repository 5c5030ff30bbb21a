"""RSS vs Atom classification, done once per document."""

from dataclasses import dataclass
from typing import List, Tuple, Union

from lxml import etree

from folio.xmltree import children_by_local_name, find_by_local_name, first_text


@dataclass(frozen=True)
class RssDialect:
    name: str = "rss"

    def extract_link(self, item: etree._Element) -> str:
        return first_text(item, ["link"])


@dataclass(frozen=True)
class AtomDialect:
    name: str = "atom"

    def extract_link(self, item: etree._Element) -> str:
        links = [ln for ln in children_by_local_name(item, "link") if ln.get("href")]
        for ln in links:
            if ln.get("rel") == "alternate":
                return ln.get("href")
        if links:
            return links[0].get("href")
        # certains flux "Atom" mettent l'URL en texte
        return first_text(item, ["link"])


Dialect = Union[RssDialect, AtomDialect]


def detect_dialect(root: etree._Element) -> Tuple[Dialect, List[etree._Element]]:
    """Return the document's dialect and its entry/item nodes, in document order.

    Atom-like when any ``entry`` exists, or when the root is named like an
    Atom feed even without entries. Zero items is a valid outcome.
    """
    root_name = etree.QName(root).localname.lower()
    if root.prefix:
        root_name = f"{root.prefix.lower()}:{root_name}"
    entries = find_by_local_name(root, "entry", include_self=True)
    items = find_by_local_name(root, "item", include_self=True)

    is_atom = bool(entries) or "feed" in root_name or "atom" in root_name
    dialect: Dialect = AtomDialect() if is_atom else RssDialect()
    return dialect, (entries if entries else items)
