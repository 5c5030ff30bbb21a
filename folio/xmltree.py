"""Namespace-tolerant element lookup over lxml trees.

Feeds bind the same vocabularies to arbitrary prefixes (``media:``,
``content:``, ``dc:``, ``atom:``) or to none at all, so lookups here work
on local names and on qualified names as written in the document.
"""

from typing import Iterable, List, Optional

from lxml import etree


def local_name(tag: str) -> str:
    """``{uri}thumbnail`` / ``media:thumbnail`` / ``thumbnail`` -> ``thumbnail``."""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    if ":" in tag:
        tag = tag.rsplit(":", 1)[1]
    return tag


def namespace_uri(el: etree._Element) -> str:
    return etree.QName(el).namespace or ""


def qualified_name(el: etree._Element) -> str:
    """Tag as written in the source document: ``prefix:local`` or ``local``."""
    local = etree.QName(el).localname
    return f"{el.prefix}:{local}" if el.prefix else local


def _is_element(node) -> bool:
    # commentaires / processing instructions: tag non-str
    return isinstance(node.tag, str)


def find_by_local_name(
    root: etree._Element, name: str, include_self: bool = False
) -> List[etree._Element]:
    """All descendants of ``root`` whose local name matches ``name`` (case-insensitive).

    ``name`` may carry a prefix; only its local part is compared. Document
    order is preserved; ``root`` itself is only considered with ``include_self``.
    """
    wanted = local_name(name).lower()
    nodes = root.iter() if include_self else root.iterdescendants()
    return [
        el for el in nodes
        if _is_element(el) and etree.QName(el).localname.lower() == wanted
    ]


def find_by_qualified_name(root: etree._Element, name: str) -> List[etree._Element]:
    """Descendants whose tag, as written (``prefix:local``), equals ``name``."""
    return [el for el in root.iterdescendants() if _is_element(el) and qualified_name(el) == name]


def find_in_namespace(root: etree._Element, uri: str, name: str) -> List[etree._Element]:
    return [
        el for el in root.iterdescendants()
        if _is_element(el) and namespace_uri(el) == uri and etree.QName(el).localname == name
    ]


def children_by_local_name(el: etree._Element, name: str) -> List[etree._Element]:
    wanted = name.lower()
    return [c for c in el if _is_element(c) and etree.QName(c).localname.lower() == wanted]


def text_content(el: Optional[etree._Element]) -> str:
    """DOM ``textContent``: all descendant text, trimmed."""
    if el is None:
        return ""
    return "".join(el.itertext()).strip()


def _first(elements: List[etree._Element]) -> Optional[etree._Element]:
    return elements[0] if elements else None


def first_text(item: etree._Element, candidates: Iterable[str]) -> str:
    """Trimmed text of the first candidate tag that yields non-empty text.

    For each candidate, in order: the first direct child with that exact
    qualified name, then the first descendant with the same local name.
    """
    for name in candidates:
        direct = [c for c in item if _is_element(c) and qualified_name(c) == name]
        text = text_content(_first(direct))
        if text:
            return text
        text = text_content(_first(find_by_local_name(item, name)))
        if text:
            return text
    return ""
