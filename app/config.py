from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://news-api-v2.herokuapp.com"
DEFAULT_TIMEOUT_SECONDS = 15.0
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/450x337"


class LayoutPolicy(str, Enum):
    """How article cards are laid out in the content region."""
    CARDS = "cards"  # one column per article, no row wrappers
    ROWS = "rows"    # a row wrapper around every pair of cards


class Settings(BaseSettings):
    """
    Process-wide configuration, read from NEWS_* environment variables or .env
    (NEWS_API_URL, NEWS_API_KEY, NEWS_TIMEOUT_SECONDS, NEWS_LAYOUT, ...).
    Built once at startup and passed explicitly into the fetcher, renderer and
    transport. Frozen: never mutated afterwards.
    """
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    layout: LayoutPolicy = LayoutPolicy.ROWS
    placeholder_image_url: str = PLACEHOLDER_IMAGE_URL
    default_country: str = "ru"
    default_category: str = "technology"

    model_config = SettingsConfigDict(
        env_prefix="NEWS_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )
