import asyncio
import logging
from typing import Dict, Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from app.config import Settings
from app.http import HttpClient, TransportError
from app.schemas import EverythingQuery, NewsResponse, TopHeadlinesQuery
from app.view import Page, Renderer

logger = logging.getLogger(__name__)

NO_NEWS_MESSAGE = "No news :("


class NewsFetcher:
    """
    Builds news API requests, drives the loading state, and hands results to
    the renderer.

    Overlapping searches are resolved by superseding: every request takes a
    ticket, and only the completion holding the newest ticket may touch the
    page. Older completions are logged and dropped, whatever order they
    arrive in, and the caller of a superseded request waits until the
    newest one has settled the page.
    """

    def __init__(
        self,
        settings: Settings,
        page: Optional[Page] = None,
        renderer: Optional[Renderer] = None,
        client: Optional[HttpClient] = None,
    ):
        self.settings = settings
        self.page = page or Page(settings.default_country, settings.default_category)
        self.renderer = renderer or Renderer(
            self.page, settings.layout, settings.placeholder_image_url
        )
        self.client = client or HttpClient(settings.timeout_seconds)
        self._ticket = 0
        self._completions: Dict[int, asyncio.Event] = {}

    # -----------------------------------------------------------------------
    # URL builders
    # -----------------------------------------------------------------------

    def top_headlines_url(self, query: TopHeadlinesQuery) -> str:
        params = {"country": query.country, "category": query.category, "apiKey": self.settings.api_key}
        return f"{self.settings.api_url.rstrip('/')}/top-headlines?{urlencode(params)}"

    def everything_url(self, query: EverythingQuery) -> str:
        params = {"q": query.q, "apiKey": self.settings.api_key}
        return f"{self.settings.api_url.rstrip('/')}/everything?{urlencode(params)}"

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    async def fetch_top_headlines(self, country: Optional[str] = None, category: Optional[str] = None):
        """Top headlines for a country and category. Defaults come from settings."""
        query = TopHeadlinesQuery(
            country=country or self.settings.default_country,
            category=category or self.settings.default_category,
        )
        logger.info(f"Fetching top headlines: country={query.country} category={query.category}")
        await self._request(self.top_headlines_url(query))

    async def fetch_everything(self, query: str):
        """Articles matching a free-text query. Country and category are not used."""
        logger.info(f"Fetching everything: q={query!r}")
        await self._request(self.everything_url(EverythingQuery(q=query)))

    async def submit(self, country: Optional[str] = None, category: Optional[str] = None, text: str = ""):
        """Search form behaviour: blank text searches headlines, anything else searches everything."""
        self.page.country = country or self.settings.default_country
        self.page.category = category or self.settings.default_category
        self.page.text = text
        if not text.strip():
            await self.fetch_top_headlines(country, category)
        else:
            await self.fetch_everything(text.strip())

    async def load(self):
        """Page-load behaviour: activate the page widgets, then show default headlines."""
        self.page.auto_init()
        await self.fetch_top_headlines()

    def on_response(self, error: Optional[Exception], response: Optional[NewsResponse]) -> None:
        """Route a completed request to a toast or to the renderer."""
        if error is not None:
            self.renderer.loading.hide()
            self.page.toast(str(error))
            return

        if not response.articles:
            self.renderer.loading.hide()
            self.page.toast(NO_NEWS_MESSAGE)
            return

        if self.page.content.children:
            self.renderer.clear_content()
        # render_content hides the loading indicator once the cards are in
        self.renderer.render_content(response.articles)

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    async def _request(self, url: str):
        """
        Run one request. Returns once the page is settled: a superseded
        request waits for the newest one to finish before returning, so
        callers never see the page mid-load.
        """
        self._ticket += 1
        ticket = self._ticket
        done = self._completions[ticket] = asyncio.Event()
        self.renderer.loading.show()

        try:
            error: Optional[Exception] = None
            response: Optional[NewsResponse] = None
            try:
                payload = await self.client.get(url)
                response = NewsResponse.model_validate(payload)
            except TransportError as e:
                error = e
            except ValidationError as e:
                logger.error(f"Unexpected response shape: {e}")
                error = TransportError("Error. Unexpected response format")

            if ticket != self._ticket:
                logger.warning(f"Dropping response for request #{ticket}, superseded by #{self._ticket}")
                await self._wait_for_latest(ticket)
                return

            self.on_response(error, response)
        finally:
            done.set()
            del self._completions[ticket]

    async def _wait_for_latest(self, ticket: int):
        while ticket != self._ticket:
            latest = self._completions.get(self._ticket)
            if latest is None:
                # The newest request has already settled the page
                return
            await latest.wait()
