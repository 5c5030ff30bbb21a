import pytest


class FakeResponse:
    def __init__(self, status=200, body=b""):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self):
        return self._body

    async def text(self):
        return self._body.decode("utf-8")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Minimal stand-in for aiohttp.ClientSession.get()."""

    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        if url not in self.routes:
            return FakeResponse(status=404)
        return self.routes[url]


@pytest.fixture
def make_session():
    def _make(routes=None, error=None):
        return FakeSession(
            {url: r if isinstance(r, FakeResponse) else FakeResponse(body=r) for url, r in (routes or {}).items()},
            error=error,
        )
    return _make


@pytest.fixture
def response():
    return FakeResponse
