"""Feed retrieval. Fails soft: any failure becomes an empty article list."""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from folio import config
from folio.models import Article
from folio.rss import try_parse_feed

log = logging.getLogger("folio.fetch")


class FetchError(Exception):
    """Non-2xx response."""


async def get_bytes(session: aiohttp.ClientSession, url: str, timeout: float) -> bytes:
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    headers = {"User-Agent": config.USER_AGENT}
    async with session.get(url, timeout=client_timeout, headers=headers) as resp:
        if not 200 <= resp.status < 300:
            raise FetchError(f"HTTP {resp.status} pour {url}")
        return await resp.read()


async def fetch_articles(
    url: Optional[str],
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
) -> List[Article]:
    """Fetch and normalize one feed. Never raises for transport or parse failures."""
    if not url:
        return []

    own_session = session is None
    if own_session:
        session = aiohttp.ClientSession()
    try:
        raw = await get_bytes(session, url, timeout or config.RSS_FETCH_TIMEOUT)
    except (FetchError, aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        log.warning("Echec chargement RSS %s: %s", url, e)
        return []
    finally:
        if own_session:
            await session.close()

    outcome = try_parse_feed(raw, url)
    if not outcome.ok:
        log.warning("Flux RSS invalide %s: %s (%s)", url, outcome.error, outcome.error.__cause__)
        return []
    log.info("Flux RSS %s: %d article(s).", url, len(outcome.articles))
    return outcome.articles
