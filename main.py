import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings
from app.fetcher import NewsFetcher
from app.routes.news import router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    settings = Settings()
    if not settings.api_key:
        logger.warning("NEWS_API_KEY is not set: the news API will likely reject requests")

    logger.info(f"Using news API at {settings.api_url} (layout: {settings.layout.value})")
    app.state.fetcher = NewsFetcher(settings)

    logger.info("Loading initial top headlines...")
    task = asyncio.create_task(app.state.fetcher.load())

    yield

    # --- Shutdown ---
    logger.info("Shutting down...")
    task.cancel()


app = FastAPI(
    title="News Search",
    description="Searches a news aggregation API and renders the results as cards.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)
