import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

import aiohttp

from folio import config
from folio.fetch import fetch_articles
from folio.home import load_home_page
from folio.site_config import ConfigError, load_app_config
from folio.utils import article_card

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(message)s",
)
log = logging.getLogger("folio")


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Folio: site data loader and feed normalizer.")
    p.add_argument("--config", default=config.CONFIG_SOURCE, help="config.yml path or URL")
    p.add_argument("--data-root", default=config.DATA_ROOT, help="base dir/URL for local data sources")
    p.add_argument("--feed", default=None, help="only fetch and print this feed")
    return p.parse_args(argv)


async def run(args) -> int:
    config.validate_timeouts()
    async with aiohttp.ClientSession() as session:
        if args.feed:
            articles = await fetch_articles(args.feed, session)
            print(json.dumps([article_card(a) for a in articles], ensure_ascii=False, indent=2))
            return 0

        try:
            app_config = await load_app_config(args.config, session)
        except ConfigError as e:
            log.error("Configuration introuvable: %s", e)
            return 1

        page = await load_home_page(app_config, args.data_root, session)

    out = {
        "projects": [asdict(p) for p in page.projects],
        "websites": [asdict(w) for w in page.websites],
        "articles": [article_card(a) for a in page.articles],
        "articleEmptyMessage": page.article_empty_message,
    }
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def main(argv=None) -> int:
    return asyncio.run(run(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
