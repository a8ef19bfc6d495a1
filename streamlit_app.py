import requests
import streamlit as st

# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

API_URL = "http://localhost:8000/api/search"

COUNTRIES = {
    "ru": "🇷🇺 Russia",
    "us": "🇺🇸 United States",
    "gb": "🇬🇧 United Kingdom",
    "de": "🇩🇪 Germany",
    "fr": "🇫🇷 France",
    "ua": "🇺🇦 Ukraine",
    "kz": "🇰🇿 Kazakhstan",
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

MATERIALIZE_CSS = "https://cdnjs.cloudflare.com/ajax/libs/materialize/1.0.0/css/materialize.min.css"

# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def search(country: str, category: str, text: str) -> dict | None:
    """Call GET /api/search. Returns the page state, or None and shows an error on failure."""
    try:
        response = requests.get(
            API_URL,
            params={"country": country, "category": category, "q": text},
            timeout=30,
        )
        response.raise_for_status()
        return response.json()
    except requests.exceptions.ConnectionError:
        st.error(
            "Cannot reach the API at http://localhost:8000. "
            "Start it with: `uvicorn main:app --reload`"
        )
        return None
    except Exception as e:
        st.error(f"Search failed: {e}")
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Page config  (must be the first Streamlit call)
# ─────────────────────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="News",
    page_icon="📰",
    layout="wide",
)
st.markdown(f'<link rel="stylesheet" href="{MATERIALIZE_CSS}">', unsafe_allow_html=True)

# ─────────────────────────────────────────────────────────────────────────────
# Session state: the last rendered result survives reruns
# ─────────────────────────────────────────────────────────────────────────────

if "result" not in st.session_state:
    st.session_state.result = None

# ─────────────────────────────────────────────────────────────────────────────
# Sidebar: search form
# ─────────────────────────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🔎 Search")

    with st.form("searchForm"):
        country = st.selectbox(
            "Country",
            options=list(COUNTRIES),
            format_func=COUNTRIES.get,
        )
        category = st.selectbox(
            "Category",
            options=CATEGORIES,
            index=CATEGORIES.index("technology"),
        )
        text = st.text_input("Search text", help="Country and category are ignored when text is given")
        submitted = st.form_submit_button("Search", use_container_width=True)

# ─────────────────────────────────────────────────────────────────────────────
# Fetch: on first load and on every submit
# ─────────────────────────────────────────────────────────────────────────────

if submitted or st.session_state.result is None:
    with st.spinner("Loading news..."):
        result = search(country, category, text)
    if result is not None:
        for message in result.get("notifications", []):
            st.toast(message)
        # An empty or failed search leaves the previous cards in place
        if result.get("articles"):
            st.session_state.result = result

# ─────────────────────────────────────────────────────────────────────────────
# Article cards
# ─────────────────────────────────────────────────────────────────────────────

st.title("📰 News")

current = st.session_state.result
if not current:
    st.info("No articles to show yet.")
else:
    st.caption(f"{len(current['articles'])} articles")
    st.markdown(current["html"], unsafe_allow_html=True)
