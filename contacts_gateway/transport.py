"""HTTP transport and query encoding for People API calls."""

import logging
from typing import Any, Mapping, Optional, Protocol
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Request could not be completed (network, protocol)."""


class TransportTimeoutError(TransportError):
    """Request timed out."""


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Serialize a flat mapping into a URL query string.

    ``None`` values are dropped; empty strings are kept.
    """
    if not params:
        return ""
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        pairs.append((key, str(value)))
    return urlencode(pairs)


class TransportResponse(BaseModel):
    """Outcome of one HTTP round trip."""

    model_config = ConfigDict(frozen=True)

    status: int
    ok: Optional[bool] = None
    json_body: Any = None
    raw: Optional[str] = None


class Transport(Protocol):
    """Executes a JSON HTTP call."""

    async def perform_json_request(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        json_body: Any = None,
    ) -> TransportResponse: ...


class HttpxTransport:
    """JSON transport backed by ``httpx.AsyncClient``.

    HTTP error statuses are returned, not raised. Network failures are
    raised as ``TransportError``.
    """

    def __init__(self, timeout: float = 10.0):
        """Initialize transport.

        Args:
            timeout: Request timeout in seconds (default: 10.0)
        """
        self.timeout = timeout

    async def perform_json_request(
        self,
        url: str,
        method: str,
        headers: Mapping[str, str],
        json_body: Any = None,
    ) -> TransportResponse:
        """Send one request and return its status and (parsed) body.

        Raises:
            TransportTimeoutError: If the request times out
            TransportError: For any other httpx error
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, headers=dict(headers), json=json_body
                )
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"{method} request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error during {method} request: {e}") from e

        raw = response.text
        parsed = None
        if raw:
            try:
                parsed = response.json()
            except ValueError:
                logger.debug("Response body is not JSON (status %s)", response.status_code)

        return TransportResponse(
            status=response.status_code,
            ok=response.status_code < 400,
            json_body=parsed,
            raw=raw,
        )
