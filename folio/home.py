"""Home page assembly: lists fetched concurrently, then cut to display counts."""

import asyncio
import logging
from typing import Optional

import aiohttp

from folio.fetch import fetch_articles
from folio.models import AppConfig, HomePage
from folio.site_config import load_projects, load_websites

log = logging.getLogger("folio.home")

NO_ARTICLES = "No articles found."
NO_FEED = "No RSS feed configured."


async def load_home_page(
    app_config: AppConfig,
    data_root: str = ".",
    session: Optional[aiohttp.ClientSession] = None,
) -> HomePage:
    """Each list fails soft on its own; a broken source only empties its list."""
    rss_url = app_config.site.rss_url
    projects, websites, articles = await asyncio.gather(
        load_projects(app_config.projects_source, data_root, session),
        load_websites(app_config.websites_source, data_root, session),
        fetch_articles(rss_url, session),
    )
    display = app_config.display
    log.info(
        "Accueil: %d projet(s), %d site(s), %d article(s).",
        len(projects), len(websites), len(articles),
    )

    articles = articles[: display.article_count]
    empty_message = None
    if not articles:
        empty_message = NO_ARTICLES if rss_url else NO_FEED
    return HomePage(
        projects=projects[: display.project_count],
        websites=websites[: display.website_count],
        articles=articles,
        article_empty_message=empty_message,
    )
