from unittest.mock import MagicMock, patch

import pytest
import requests

from app.http import HttpClient, HttpStatusError, NetworkError, TransportError


def make_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {"articles": []}
    return response


class TestHttpClientGet:
    async def test_returns_parsed_json_on_200(self):
        body = {"articles": [{"title": "x"}]}
        with patch("app.http.requests.get", return_value=make_response(200, body)):
            result = await HttpClient().get("https://news.example.com/everything?q=x")

        assert result == body

    async def test_any_2xx_is_success(self):
        with patch("app.http.requests.get", return_value=make_response(204, {"articles": []})):
            result = await HttpClient().get("https://news.example.com")

        assert result == {"articles": []}

    async def test_non_2xx_raises_with_status_code(self):
        with patch("app.http.requests.get", return_value=make_response(401)):
            with pytest.raises(HttpStatusError) as exc_info:
                await HttpClient().get("https://news.example.com")

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Error. Status code 401"

    async def test_redirect_status_is_an_error(self):
        with patch("app.http.requests.get", return_value=make_response(304)):
            with pytest.raises(HttpStatusError):
                await HttpClient().get("https://news.example.com")

    async def test_network_failure_raises_network_error(self):
        with patch("app.http.requests.get", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(NetworkError, match="refused"):
                await HttpClient().get("https://news.example.com")

    async def test_timeout_raises_network_error(self):
        with patch("app.http.requests.get", side_effect=requests.Timeout("too slow")):
            with pytest.raises(NetworkError):
                await HttpClient().get("https://news.example.com")

    async def test_invalid_json_raises_network_error(self):
        response = make_response(200)
        response.json.side_effect = ValueError("Expecting value")
        with patch("app.http.requests.get", return_value=response):
            with pytest.raises(NetworkError, match="invalid JSON"):
                await HttpClient().get("https://news.example.com")

    async def test_passes_configured_timeout(self):
        with patch("app.http.requests.get", return_value=make_response()) as mock_get:
            await HttpClient(timeout_seconds=3.5).get("https://news.example.com")

        mock_get.assert_called_once_with("https://news.example.com", timeout=3.5)

    def test_errors_share_a_base_class(self):
        assert issubclass(HttpStatusError, TransportError)
        assert issubclass(NetworkError, TransportError)
