import asyncio
import logging

import aiohttp

from folio.fetch import fetch_articles

URL = "https://blog.example.com/rss.xml"
FEED = "<rss><channel><item><title>A</title></item><item><title>B</title></item></channel></rss>"


def _run(coro):
    return asyncio.run(coro)


# ── fetch_articles ────────────────────────────────────────────

class TestFetchArticles:
    def test_empty_url_no_network(self, make_session):
        session = make_session({URL: FEED})
        assert _run(fetch_articles("", session)) == []
        assert _run(fetch_articles(None, session)) == []
        assert session.calls == []

    def test_success(self, make_session):
        session = make_session({URL: FEED})
        articles = _run(fetch_articles(URL, session))
        assert [a.title for a in articles] == ["A", "B"]
        assert [a.guid for a in articles] == [f"{URL}#0", f"{URL}#1"]
        assert len(session.calls) == 1

    def test_http_error_status(self, make_session, response):
        session = make_session({URL: response(status=503, body=FEED)})
        assert _run(fetch_articles(URL, session)) == []

    def test_redirect_status_is_not_success(self, make_session, response):
        session = make_session({URL: response(status=304, body=FEED)})
        assert _run(fetch_articles(URL, session)) == []

    def test_network_error(self, make_session):
        session = make_session(error=aiohttp.ClientConnectionError("unreachable"))
        assert _run(fetch_articles(URL, session)) == []

    def test_timeout(self, make_session):
        session = make_session(error=asyncio.TimeoutError())
        assert _run(fetch_articles(URL, session)) == []

    def test_malformed_xml(self, make_session, caplog):
        session = make_session({URL: "<rss><channel><item>"})
        with caplog.at_level(logging.WARNING, logger="folio.fetch"):
            assert _run(fetch_articles(URL, session)) == []
        assert "Invalid XML feed" in caplog.text

    def test_timeout_passed_to_request(self, make_session):
        session = make_session({URL: FEED})
        _run(fetch_articles(URL, session, timeout=5))
        _, kwargs = session.calls[0]
        assert kwargs["timeout"].total == 5
        assert "User-Agent" in kwargs["headers"]

    def test_independent_concurrent_calls(self, make_session):
        other = "https://other.example.com/feed"
        session = make_session({URL: FEED, other: "<rss><channel><item><title>C</title></item></channel></rss>"})

        async def both():
            return await asyncio.gather(fetch_articles(URL, session), fetch_articles(other, session))

        first, second = _run(both())
        assert [a.title for a in first] == ["A", "B"]
        assert [a.title for a in second] == ["C"]
