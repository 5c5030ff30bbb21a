import re
from typing import List, Optional

from lxml import etree

from folio.xmltree import (
    find_by_local_name,
    find_by_qualified_name,
    find_in_namespace,
    first_text,
    text_content,
)

MEDIA_NS = "http://search.yahoo.com/mrss/"
DC_NS = "http://purl.org/dc/elements/1.1/"

_IMG_SRC_RE = re.compile(r"""<img[^>]+src=["']([^"']+)["']""", re.I)


def _first_ext(item: etree._Element, qname: str, uri: str) -> Optional[etree._Element]:
    # nom qualifie exact, sinon meme namespace sous un autre prefixe
    found = find_by_qualified_name(item, qname) or find_in_namespace(item, uri, qname.split(":", 1)[1])
    return found[0] if found else None


def _media_url(item: etree._Element) -> Optional[str]:
    for qname in ("media:content", "media:thumbnail"):
        el = _first_ext(item, qname, MEDIA_NS)
        if el is not None and el.get("url"):
            return el.get("url")
    return None


def _enclosure_url(item: etree._Element) -> Optional[str]:
    found = find_by_local_name(item, "enclosure")
    if not found:
        return None
    el = found[0]
    mime = el.get("type") or ""
    if not mime or mime.startswith("image"):
        return el.get("url") or None
    return None


def _image_element_url(item: etree._Element) -> Optional[str]:
    found = find_by_local_name(item, "image")
    if not found:
        return None
    el = found[0]
    return first_text(el, ["url"]) or el.get("href") or None


def image_from_html(description: str) -> Optional[str]:
    """First ``<img src>`` in an HTML fragment. Best-effort, regex only."""
    m = _IMG_SRC_RE.search(description or "")
    return m.group(1) if m else None


def extract_thumbnail(item: etree._Element, description: str, scan_html: bool = True) -> Optional[str]:
    """Preview image URL for an item, or None when there is none.

    Tried in order: Media RSS content/thumbnail, image enclosure, ``<image>``
    element, then (if ``scan_html``) the first ``<img>`` of the description.
    """
    for resolver in (_media_url, _enclosure_url, _image_element_url):
        url = resolver(item)
        if url:
            return url
    if scan_html:
        return image_from_html(description)
    return None


def extract_categories(item: etree._Element) -> List[str]:
    cats = [
        (el.get("term") or text_content(el)).strip()
        for el in find_by_local_name(item, "category")
    ]
    subjects = [
        text_content(el)
        for el in (find_by_qualified_name(item, "dc:subject") or find_in_namespace(item, DC_NS, "subject"))
    ]
    # dedup exact (sensible a la casse), ordre de premiere occurrence
    return list(dict.fromkeys(v for v in cats + subjects if v))
