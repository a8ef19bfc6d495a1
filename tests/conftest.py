from typing import Any, List

import pytest

from app.config import Settings
from app.fetcher import NewsFetcher


class FakeClient:
    """Stands in for HttpClient: returns a canned payload or raises a canned error."""

    def __init__(self, payload: Any = None, error: Exception = None):
        self.payload = payload
        self.error = error
        self.urls: List[str] = []

    async def get(self, url: str) -> Any:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


def make_article(**kwargs) -> dict:
    """Returns a wire-format article dict, overridable via kwargs."""
    defaults = {
        "title": "Warriors win back to back to start Okanagan Cup",
        "description": "Vipers goaltender Roan Clarke stopped 17 shots.",
        "url": "https://www.example.com/news/warriors-win",
        "urlToImage": "https://www.example.com/image/okanagancup.jpg",
    }
    defaults.update(kwargs)
    return defaults


def make_payload(*titles: str) -> dict:
    return {"status": "ok", "articles": [make_article(title=t) for t in titles]}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, api_url="https://news.example.com", api_key="test-key")


@pytest.fixture
def make_fetcher(settings):
    def _make(payload: Any = None, error: Exception = None) -> NewsFetcher:
        return NewsFetcher(settings, client=FakeClient(payload=payload, error=error))
    return _make


class GatedClient:
    """Each get() blocks until its gate is opened, then returns its payload."""

    def __init__(self, *responses):
        self._responses = iter(responses)
        self.urls: List[str] = []

    async def get(self, url: str) -> Any:
        self.urls.append(url)
        gate, payload = next(self._responses)
        await gate.wait()
        return payload
