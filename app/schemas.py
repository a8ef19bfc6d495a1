from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """One news item as returned by the news API. Extra wire fields are ignored."""
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    url_to_image: Optional[str] = Field(default=None, alias="urlToImage")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class NewsResponse(BaseModel):
    """Shape of a successful /top-headlines or /everything response."""
    articles: List[Article] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class TopHeadlinesQuery(BaseModel):
    country: str
    category: str


class EverythingQuery(BaseModel):
    q: str


class SearchResult(BaseModel):
    """Shape returned by /api/search: page state after the search completed."""
    articles: List[Article]
    html: str
    notifications: List[str]
    loading: bool
    submit_enabled: bool

