"""Pytest configuration for Contacts Gateway tests.

This module configures pytest to:
1. Load .env.test file before running tests
2. Provide a gateway wired to mock collaborators
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, Mock
from urllib.parse import parse_qs, urlsplit

import pytest
from dotenv import load_dotenv

from contacts_gateway.config import PeopleAPIConfig
from contacts_gateway.gateway import ContactsGateway
from contacts_gateway.transport import TransportResponse

BASE_URL = "https://people.googleapis.com/v1"
TEST_TOKEN = "test_access_token_123"


def pytest_configure(config):
    """Load .env.test before running any tests."""
    project_root = Path(__file__).parent.parent
    env_test_path = project_root / ".env.test"

    if env_test_path.exists():
        load_dotenv(env_test_path, override=True)


@pytest.fixture
def google_fixtures():
    """Load Google API response fixtures."""
    fixtures_path = Path(__file__).parent / "fixtures" / "google_responses.json"
    with open(fixtures_path) as f:
        return json.load(f)


@pytest.fixture
def authenticator():
    """Authenticator returning a fixed token."""
    auth = Mock()
    auth.acquire_token = AsyncMock(return_value=TEST_TOKEN)
    return auth


@pytest.fixture
def transport():
    """Spy transport answering 200 with an empty JSON object."""
    spy = Mock()
    spy.perform_json_request = AsyncMock(
        return_value=TransportResponse(status=200, ok=True, json_body={}, raw="{}")
    )
    return spy


@pytest.fixture
def gateway(authenticator, transport):
    """Gateway wired to the mock authenticator and spy transport."""
    return ContactsGateway(authenticator, transport=transport, api=PeopleAPIConfig())


@pytest.fixture
def respond(transport):
    """Make the spy transport answer with a JSON body."""

    def _respond(status: int = 200, body: Any = None, ok: Any = None) -> None:
        raw = json.dumps(body) if body is not None else ""
        transport.perform_json_request.return_value = TransportResponse(
            status=status, ok=ok, json_body=body, raw=raw
        )

    return _respond


@pytest.fixture
def last_request(transport):
    """Decompose the last request made through the spy transport."""

    def _last_request() -> dict[str, Any]:
        url, method, headers, body = transport.perform_json_request.call_args.args
        parts = urlsplit(url)
        query = parse_qs(parts.query, keep_blank_values=True)
        return {
            "url": url,
            "method": method,
            "headers": headers,
            "body": body,
            "path": parts.path[len(urlsplit(BASE_URL).path) + 1 :],
            "params": {key: values[0] for key, values in query.items()},
        }

    return _last_request
