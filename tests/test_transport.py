"""Tests for the HTTP transport and query encoding."""

import json
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from contacts_gateway.transport import (
    HttpxTransport,
    TransportError,
    TransportTimeoutError,
    encode_query,
)


def mock_http_response(mock_async_client, status_code, text="", side_effect=None):
    """Wire the patched AsyncClient to answer client.request()."""
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.text = text
    mock_response.json.side_effect = lambda: json.loads(text)

    mock_context = AsyncMock()
    if side_effect is not None:
        mock_context.__aenter__.return_value.request = AsyncMock(side_effect=side_effect)
    else:
        mock_context.__aenter__.return_value.request = AsyncMock(return_value=mock_response)
    mock_async_client.return_value = mock_context
    return mock_context.__aenter__.return_value.request


class TestEncodeQuery:
    """Test encode_query."""

    def test_empty(self):
        """Should encode nothing for empty or missing params."""
        assert encode_query(None) == ""
        assert encode_query({}) == ""

    def test_keeps_order_and_escapes(self):
        """Should keep insertion order and percent-encode values."""
        query = encode_query({"query": "a@b.com", "readMask": "names,emailAddresses"})

        assert query == "query=a%40b.com&readMask=names%2CemailAddresses"

    def test_keeps_empty_string(self):
        """Should keep empty string values."""
        assert encode_query({"query": "", "pageSize": 5}) == "query=&pageSize=5"

    def test_drops_none(self):
        """Should drop None values."""
        assert encode_query({"query": "x", "pageSize": None}) == "query=x"


class TestHttpxTransport:
    """Test HttpxTransport.perform_json_request."""

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_json_response(self, mock_async_client, google_fixtures):
        """Should parse JSON bodies and report ok for 2xx."""
        body = google_fixtures["people_api_person"]
        request = mock_http_response(mock_async_client, 200, json.dumps(body))

        response = await HttpxTransport().perform_json_request(
            "https://people.googleapis.com/v1/people/c1001",
            "GET",
            {"Authorization": "Bearer t"},
        )

        assert response.status == 200
        assert response.ok is True
        assert response.json_body == body
        assert response.raw == json.dumps(body)
        assert request.call_args.args == ("GET", "https://people.googleapis.com/v1/people/c1001")
        assert request.call_args.kwargs["json"] is None

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_sends_json_body(self, mock_async_client):
        """Should hand the JSON body to httpx."""
        request = mock_http_response(mock_async_client, 200, "{}")

        await HttpxTransport().perform_json_request(
            "https://people.googleapis.com/v1/people:createContact",
            "POST",
            {"Content-Type": "application/json"},
            {"emailAddresses": [{"value": "x@y.com"}]},
        )

        sent = request.call_args.kwargs["json"]
        assert sent == {"emailAddresses": [{"value": "x@y.com"}]}
        assert request.call_args.kwargs["headers"] == {"Content-Type": "application/json"}

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_error_status_returned(self, mock_async_client, google_fixtures):
        """Should return error statuses instead of raising."""
        body = google_fixtures["people_api_error_not_found"]
        mock_http_response(mock_async_client, 404, json.dumps(body))

        response = await HttpxTransport().perform_json_request("https://x/v1/people/c0", "GET", {})

        assert response.status == 404
        assert response.ok is False
        assert response.json_body["error"]["code"] == 404

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_empty_body(self, mock_async_client):
        """Should leave json_body unset for empty responses."""
        mock_http_response(mock_async_client, 200, "")

        response = await HttpxTransport().perform_json_request("https://x/v1/a", "DELETE", {})

        assert response.json_body is None
        assert response.raw == ""

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_non_json_body(self, mock_async_client):
        """Should keep non-JSON bodies as raw text."""
        mock_http_response(mock_async_client, 502, "<html>Bad Gateway</html>")

        response = await HttpxTransport().perform_json_request("https://x/v1/a", "GET", {})

        assert response.json_body is None
        assert response.raw == "<html>Bad Gateway</html>"

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_timeout(self, mock_async_client):
        """Should raise TransportTimeoutError on timeout."""
        mock_http_response(mock_async_client, 0, side_effect=httpx.TimeoutException("Timeout"))

        with pytest.raises(TransportTimeoutError, match="timed out"):
            await HttpxTransport(timeout=2.0).perform_json_request("https://x/v1/a", "GET", {})

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_connection_error(self, mock_async_client):
        """Should raise TransportError on network failures."""
        mock_http_response(
            mock_async_client, 0, side_effect=httpx.ConnectError("Connection refused")
        )

        with pytest.raises(TransportError, match="HTTP error during GET request"):
            await HttpxTransport().perform_json_request("https://x/v1/a", "GET", {})

    @pytest.mark.asyncio
    @patch("contacts_gateway.transport.httpx.AsyncClient")
    async def test_timeout_passed_to_client(self, mock_async_client):
        """Should configure httpx with the transport timeout."""
        mock_http_response(mock_async_client, 200, "{}")

        await HttpxTransport(timeout=3.5).perform_json_request("https://x/v1/a", "GET", {})

        mock_async_client.assert_called_once_with(timeout=3.5)

    @pytest.mark.asyncio
    async def test_json_body_on_the_wire(self):
        """Should send the body as JSON and parse the JSON reply through httpx."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["Content-Type"]
            return httpx.Response(200, json={"resourceName": "people/c9"})

        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        with patch("contacts_gateway.transport.httpx.AsyncClient", side_effect=client_factory):
            response = await HttpxTransport().perform_json_request(
                "https://people.googleapis.com/v1/people:createContact",
                "POST",
                {"Content-Type": "application/json"},
                {"emailAddresses": [{"value": "x@y.com"}]},
            )

        assert seen == {
            "method": "POST",
            "body": {"emailAddresses": [{"value": "x@y.com"}]},
            "content_type": "application/json",
        }
        assert response.json_body == {"resourceName": "people/c9"}
