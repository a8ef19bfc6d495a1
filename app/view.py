import html
import json
import logging
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from app.config import PLACEHOLDER_IMAGE_URL, LayoutPolicy
from app.schemas import Article

logger = logging.getLogger(__name__)

LOADING_INDICATOR_HTML = "<div class='progress'><div class='indeterminate'></div></div>"
ROW_OPEN = '<div class="row">'
ROW_CLOSE = "</div>"
LINK_LABEL = "This is a link"
SAFE_SCHEMES = ("http", "https")

MATERIALIZE_CSS = "https://cdnjs.cloudflare.com/ajax/libs/materialize/1.0.0/css/materialize.min.css"
MATERIALIZE_JS = "https://cdnjs.cloudflare.com/ajax/libs/materialize/1.0.0/js/materialize.min.js"

COUNTRIES = {
    "ru": "Russia",
    "us": "United States",
    "gb": "United Kingdom",
    "de": "Germany",
    "fr": "France",
    "ua": "Ukraine",
    "kz": "Kazakhstan",
}

CATEGORIES = [
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
]


# ---------------------------------------------------------------------------
# Card template
# ---------------------------------------------------------------------------

def safe_url(url: Optional[str]) -> Optional[str]:
    """Return url if it is an http(s) link, None otherwise (e.g. javascript: or data: URLs)."""
    if url and urlparse(url.strip()).scheme.lower() in SAFE_SCHEMES:
        return url
    return None


def template(
    article: Article,
    index: int,
    total: int,
    layout: LayoutPolicy = LayoutPolicy.ROWS,
    placeholder_image_url: str = PLACEHOLDER_IMAGE_URL,
) -> str:
    """
    Render one article as a two-column Materialize card.
    With LayoutPolicy.ROWS a row wrapper is opened on even indices and closed
    on odd indices or on the last card, so every pair shares a row.
    """
    image = safe_url(article.url_to_image) or placeholder_image_url
    card = (
        '<div class="col s12 m6">'
        '<div class="card">'
        '<div class="card-image">'
        f'<img src="{html.escape(image)}">'
        "</div>"
        '<div class="card-content">'
        f'<span class="card-title">{html.escape(article.title or "")}</span>'
        f"<p>{html.escape(article.description or '')}</p>"
        "</div>"
        '<div class="card-action">'
        f'<a href="{html.escape(safe_url(article.url) or "#")}">{LINK_LABEL}</a>'
        "</div>"
        "</div>"
        "</div>"
    )
    if layout is LayoutPolicy.CARDS:
        return card

    opens_row = index % 2 == 0
    closes_row = index % 2 == 1 or index == total - 1
    return f"{ROW_OPEN if opens_row else ''}{card}{ROW_CLOSE if closes_row else ''}"


# ---------------------------------------------------------------------------
# Page surface: content region, body, submit control, toasts
# ---------------------------------------------------------------------------

class ContentRegion:
    """The #newsContent container. Holds inserted markup blocks in document order."""

    def __init__(self):
        self.children: List[str] = []
        self.mutations = 0

    def insert_afterbegin(self, markup: str) -> None:
        # Empty markup is not a mutation
        if not markup:
            return
        self.children.insert(0, markup)
        self.mutations += 1

    def clear(self) -> None:
        self.children = []
        self.mutations += 1

    @property
    def html(self) -> str:
        return "".join(self.children)


class Page:
    """
    Server-side stand-in for the browser document the widget lives in.
    Everything the fetcher and renderer change goes through this object.
    """

    def __init__(self, country: str = "", category: str = ""):
        self.content = ContentRegion()
        self.body_prefix: List[str] = []
        self.articles: List[Article] = []
        self.notifications: List[str] = []
        self.submit_enabled = True
        self.auto_initialized = False
        # Last submitted form values, echoed back into the form
        self.country = country
        self.category = category
        self.text = ""

    @property
    def loading(self) -> bool:
        return LOADING_INDICATOR_HTML in self.body_prefix

    def toast(self, message: str) -> None:
        logger.info(f"Toast: {message}")
        self.notifications.append(message)

    def auto_init(self) -> None:
        """Mark the page so the rendered document runs M.AutoInit() on load."""
        self.auto_initialized = True

    def drain_notifications(self) -> List[str]:
        pending, self.notifications = self.notifications, []
        return pending

    def render(self) -> str:
        """Serialise the page to a full HTML document. Pending toasts are emitted once."""
        toasts = "".join(
            f"M.toast({{html: {json.dumps(html.escape(message))}}});"
            for message in self.drain_notifications()
        )
        init = "M.AutoInit();" if self.auto_initialized else ""
        return (
            "<!DOCTYPE html>"
            '<html lang="en">'
            "<head>"
            '<meta charset="utf-8">'
            '<meta name="viewport" content="width=device-width, initial-scale=1">'
            "<title>News</title>"
            f'<link rel="stylesheet" href="{MATERIALIZE_CSS}">'
            "</head>"
            "<body>"
            f"{''.join(self.body_prefix)}"
            '<div class="container">'
            f"{self._render_form()}"
            f'<div id="newsContent">{self.content.html}</div>'
            "</div>"
            f'<script src="{MATERIALIZE_JS}"></script>'
            f"<script>{init}{toasts}</script>"
            "</body>"
            "</html>"
        )

    def _render_form(self) -> str:
        countries = _options(COUNTRIES.items(), self.country)
        categories = _options(((c, c.capitalize()) for c in CATEGORIES), self.category)
        disabled = "" if self.submit_enabled else " disabled"
        return (
            '<form name="searchForm" action="/search" method="get" class="row">'
            '<div class="input-field col s12 m3">'
            f'<select name="searchCountry">{countries}</select>'
            "</div>"
            '<div class="input-field col s12 m3">'
            f'<select name="searchCategory">{categories}</select>'
            "</div>"
            '<div class="input-field col s12 m4">'
            f'<input type="text" name="searchText" placeholder="Search" value="{html.escape(self.text)}">'
            "</div>"
            '<div class="input-field col s12 m2">'
            f'<button class="btn" type="submit" name="action"{disabled}>Search</button>'
            "</div>"
            "</form>"
        )


def _options(pairs: Iterable, selected: str) -> str:
    return "".join(
        f'<option value="{html.escape(value)}"{" selected" if value == selected else ""}>'
        f"{html.escape(label)}</option>"
        for value, label in pairs
    )


# ---------------------------------------------------------------------------
# Loading indicator
# ---------------------------------------------------------------------------

class LoadingIndicator:
    """Progress bar at the top of the body plus the submit button's disabled flag."""

    def __init__(self, page: Page):
        self.page = page

    def show(self) -> None:
        self.page.submit_enabled = False
        # Never more than one indicator on the page
        if not self.page.loading:
            self.page.body_prefix.insert(0, LOADING_INDICATOR_HTML)

    def hide(self) -> None:
        """Safe to call when no indicator is present."""
        self.page.submit_enabled = True
        if self.page.loading:
            self.page.body_prefix.remove(LOADING_INDICATOR_HTML)


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class Renderer:
    """Turns article lists into markup and writes it into the page's content region."""

    def __init__(
        self,
        page: Page,
        layout: LayoutPolicy = LayoutPolicy.ROWS,
        placeholder_image_url: str = PLACEHOLDER_IMAGE_URL,
    ):
        self.page = page
        self.layout = layout
        self.placeholder_image_url = placeholder_image_url
        self.loading = LoadingIndicator(page)

    def clear_content(self) -> None:
        self.page.content.clear()
        self.page.articles = []

    def render_content(self, articles: Sequence[Article]) -> None:
        """
        Build one fragment per article, in order, and insert them all at the
        start of the content region in a single mutation. Hides the loading
        indicator afterwards.
        """
        total = len(articles)
        fragment = "".join(
            template(article, index, total, self.layout, self.placeholder_image_url)
            for index, article in enumerate(articles)
        )
        self.page.content.insert_afterbegin(fragment)
        self.page.articles = list(articles) + self.page.articles
        logger.info(f"Rendered {total} articles")

        self.loading.hide()
