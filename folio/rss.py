import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Union

from lxml import etree

from folio.dialect import Dialect, detect_dialect
from folio.extract import extract_categories, extract_thumbnail
from folio.models import Article
from folio.xmltree import first_text

log = logging.getLogger("folio.rss")

TITLE_FIELDS = ["title"]
PUB_DATE_FIELDS = ["pubDate", "published", "updated", "dc:date"]
DESCRIPTION_FIELDS = ["content:encoded", "content", "description", "summary"]
GUID_FIELDS = ["guid", "id"]

# entites internes du DTD developpees, entites externes jamais chargees
_STRICT_PARSER = dict(resolve_entities="internal", no_network=True, huge_tree=False)


class FeedParseError(Exception):
    """The feed text is not well-formed XML."""


@dataclass(frozen=True)
class ParseOutcome:
    articles: List[Article] = field(default_factory=list)
    error: Optional[FeedParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_document(raw: Union[str, bytes]) -> etree._Element:
    if isinstance(raw, str):
        # le texte est deja decode: ignorer l'eventuelle declaration encoding=
        data = raw.encode("utf-8")
        parser = etree.XMLParser(encoding="utf-8", **_STRICT_PARSER)
    else:
        data = raw
        parser = etree.XMLParser(**_STRICT_PARSER)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise FeedParseError("Invalid XML feed") from e
    if root is None:
        raise FeedParseError("Invalid XML feed")
    return root


def item_to_article(item: etree._Element, index: int, dialect: Dialect, source_url: str) -> Article:
    resolved_link = dialect.extract_link(item)
    description = first_text(item, DESCRIPTION_FIELDS)
    return Article(
        # guid synthetise seulement si ni id ni lien propre a l'item
        guid=first_text(item, GUID_FIELDS) or resolved_link or f"{source_url}#{index}",
        title=first_text(item, TITLE_FIELDS) or "Untitled",
        link=resolved_link or source_url,
        pub_date=first_text(item, PUB_DATE_FIELDS) or _now_iso(),
        description=description,
        thumbnail=extract_thumbnail(item, description),
        categories=extract_categories(item),
    )


def parse_feed(raw: Union[str, bytes], source_url: str) -> List[Article]:
    """Map an RSS 2.0, RSS 1.0/RDF or Atom document to articles, in document order.

    Raises FeedParseError when the text is not well-formed XML. Missing
    fields never raise; they take their defaults.
    """
    root = _parse_document(raw)
    dialect, items = detect_dialect(root)
    log.debug("Flux %s: dialecte=%s, %d element(s).", source_url, dialect.name, len(items))
    return [item_to_article(item, i, dialect, source_url) for i, item in enumerate(items)]


def try_parse_feed(raw: Union[str, bytes], source_url: str) -> ParseOutcome:
    try:
        return ParseOutcome(articles=parse_feed(raw, source_url))
    except FeedParseError as e:
        return ParseOutcome(error=e)
