import asyncio
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors: every failure of a GET ends up as one of these
# ---------------------------------------------------------------------------

class TransportError(Exception):
    """Base class for anything that went wrong fetching a URL."""


class HttpStatusError(TransportError):
    """The server answered with a non-2xx status code."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Error. Status code {status_code}")


class NetworkError(TransportError):
    """The request never produced a usable response (connection, timeout, bad JSON)."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class HttpClient:
    """
    Issues a single GET and parses the JSON body. No retries.
    requests is blocking, so the call runs in a worker thread to keep the
    event loop free while a search is in flight.
    """

    def __init__(self, timeout_seconds: float = 15.0):
        self.timeout_seconds = timeout_seconds

    async def get(self, url: str) -> Any:
        """
        Fetch url and return the decoded JSON body.
        Raises HttpStatusError on a non-2xx status, NetworkError otherwise.
        """
        return await asyncio.to_thread(self._get_sync, url)

    def _get_sync(self, url: str) -> Any:
        try:
            response = requests.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as e:
            logger.error(f"GET failed before a response arrived: {e}")
            raise NetworkError(f"Network error: {e}") from e

        if response.status_code // 100 != 2:
            logger.warning(f"GET returned status {response.status_code}")
            raise HttpStatusError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response body is not valid JSON: {e}")
            raise NetworkError("Network error: invalid JSON in response") from e
