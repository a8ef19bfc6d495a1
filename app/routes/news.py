import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.fetcher import NewsFetcher
from app.schemas import SearchResult

logger = logging.getLogger(__name__)

router = APIRouter()


def get_fetcher(request: Request) -> NewsFetcher:
    """FastAPI dependency returning the process-wide fetcher built at startup."""
    return request.app.state.fetcher


# Every handler is async so page state is only touched on the event loop


@router.get("/", response_class=HTMLResponse)
async def index(fetcher: NewsFetcher = Depends(get_fetcher)):
    """Return the page as it currently stands."""
    return fetcher.page.render()


@router.get("/search", response_class=HTMLResponse)
async def search(
    searchCountry: Optional[str] = None,
    searchCategory: Optional[str] = None,
    searchText: str = "",
    fetcher: NewsFetcher = Depends(get_fetcher),
):
    """
    Search form target. Blank searchText searches top headlines for the
    selected country and category, otherwise everything matching the text.
    Missing country/category fall back to the configured defaults.
    """
    logger.info(f"[/search] country={searchCountry} category={searchCategory} text={searchText!r}")
    await fetcher.submit(searchCountry, searchCategory, searchText)
    return fetcher.page.render()


@router.get("/api/search", response_model=SearchResult)
async def api_search(
    country: Optional[str] = None,
    category: Optional[str] = None,
    q: str = "",
    fetcher: NewsFetcher = Depends(get_fetcher),
):
    """Same as /search but returns the page state as JSON for non-browser front ends."""
    logger.info(f"[/api/search] country={country} category={category} q={q!r}")
    await fetcher.submit(country, category, q)
    page = fetcher.page
    result = SearchResult(
        articles=page.articles,
        html=page.content.html,
        notifications=page.drain_notifications(),
        loading=page.loading,
        submit_enabled=page.submit_enabled,
    )
    logger.info(f"[/api/search] Returning {len(result.articles)} articles")
    return result
