import re
import html
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import List, Optional

from bs4 import BeautifulSoup

from folio.models import Article


def truncate_text(text: str, limit: int, ellipsis: str = "...") -> str:
    """Cut to at most ``limit`` chars, on a word boundary when there is one."""
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    cut = text[: max(0, limit - len(ellipsis))]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip() + ellipsis


def strip_html_to_text(raw_html: str) -> str:
    """Plain-text summary of an HTML fragment (tags dropped, entities decoded)."""
    raw_html = raw_html or ""
    text = BeautifulSoup(raw_html, "html.parser").get_text(" ")
    text = html.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def summarize(article: Article, limit: int = 280) -> str:
    return truncate_text(strip_html_to_text(article.description), limit)


def parse_pub_date(pub_date: str) -> Optional[datetime]:
    """ISO-8601 (Atom, dc:date) or RFC-822 (RSS pubDate). None if neither."""
    s = (pub_date or "").strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(s)
    except (TypeError, ValueError, IndexError):
        return None


def format_pub_date(pub_date: str) -> str:
    dt = parse_pub_date(pub_date)
    if dt is None:
        return pub_date or ""
    return f"{dt:%b} {dt.day}, {dt.year}"


def primary_category(article: Article) -> str:
    return article.categories[0] if article.categories else "Uncategorized"


def secondary_categories(article: Article) -> List[str]:
    return list(article.categories[1:4])


def article_card(article: Article, summary_limit: int = 280) -> dict:
    """Article as the list view renders it: raw fields plus display values."""
    out = article.to_dict()
    out["summary"] = summarize(article, summary_limit)
    out["displayDate"] = format_pub_date(article.pub_date)
    out["primaryCategory"] = primary_category(article)
    out["secondaryCategories"] = secondary_categories(article)
    return out
