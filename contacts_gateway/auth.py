"""Token acquisition for the People API.

The gateway only needs something that turns a set of scopes into a bearer
token. Two implementations are provided:

- ``StaticTokenAuthenticator``: a pre-issued access token (development, tests)
- ``GoogleRefreshTokenAuthenticator``: Google OAuth2 refresh token grant
"""

import os
from typing import Iterable, Optional, Protocol

import httpx


class OAuthError(Exception):
    """Base exception for OAuth errors."""


class RefreshTokenRevokedError(OAuthError):
    """Refresh token was revoked or has expired."""


class InvalidScopesError(OAuthError):
    """Requested scopes were not granted for this refresh token."""


GOOGLE_SCOPE_PREFIX = "https://www.googleapis.com/auth/"


def expand_scopes(scopes: Iterable[str]) -> list[str]:
    """Expand short scope names ("contacts") to full Google scope URLs.

    Scopes that are already URLs are passed through unchanged.
    """
    expanded = []
    for scope in scopes:
        if scope.startswith("https://"):
            expanded.append(scope)
        else:
            expanded.append(GOOGLE_SCOPE_PREFIX + scope)
    return expanded


class Authenticator(Protocol):
    """Supplies a bearer token for a set of scopes."""

    async def acquire_token(self, scopes: tuple[str, ...]) -> str: ...


class StaticTokenAuthenticator:
    """Authenticator returning a pre-issued access token for any scope."""

    def __init__(self, access_token: str):
        if not access_token:
            raise OAuthError("An access token is required")
        self.access_token = access_token

    async def acquire_token(self, scopes: tuple[str, ...]) -> str:
        return self.access_token


class GoogleRefreshTokenAuthenticator:
    """Google OAuth2 client exchanging a refresh token for access tokens.

    Every call performs one token request; tokens are not cached.
    """

    TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        refresh_token: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """Initialize with Google credentials.

        Args:
            client_id: Google OAuth client ID. If None, reads from env GOOGLE_CLIENT_ID.
            client_secret: Google OAuth client secret. If None, reads from env GOOGLE_CLIENT_SECRET.
            refresh_token: Refresh token. If None, reads from env GOOGLE_REFRESH_TOKEN.
            timeout: Token request timeout in seconds (default: 10.0)

        Raises:
            OAuthError: If credentials are missing
        """
        self.client_id = client_id or os.getenv("GOOGLE_CLIENT_ID")
        self.client_secret = client_secret or os.getenv("GOOGLE_CLIENT_SECRET")
        self.refresh_token = refresh_token or os.getenv("GOOGLE_REFRESH_TOKEN")
        self.timeout = timeout

        if not self.client_id or not self.client_secret:
            raise OAuthError(
                "GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET environment variables are required"
            )
        if not self.refresh_token:
            raise OAuthError("GOOGLE_REFRESH_TOKEN environment variable is required")

    async def acquire_token(self, scopes: tuple[str, ...]) -> str:
        """Exchange the refresh token for an access token limited to ``scopes``.

        Returns:
            Access token string

        Raises:
            RefreshTokenRevokedError: If the refresh token is invalid or revoked
            InvalidScopesError: If the scopes were not granted
            OAuthError: If the token request fails for other reasons
        """
        data = {
            "refresh_token": self.refresh_token,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "refresh_token",
            "scope": " ".join(expand_scopes(scopes)),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.TOKEN_ENDPOINT, data=data)

                if response.status_code in (400, 401):
                    error_data = response.json()
                    error_type = error_data.get("error", "unknown")
                    error_desc = error_data.get("error_description", "No description")

                    if error_type == "invalid_grant":
                        raise RefreshTokenRevokedError(
                            f"Refresh token is invalid or revoked: {error_desc}"
                        )
                    if error_type == "invalid_scope":
                        raise InvalidScopesError(f"Scopes not granted: {error_desc}")

                    raise OAuthError(f"OAuth error: {error_type} - {error_desc}")

                response.raise_for_status()
                token = response.json().get("access_token")

        except httpx.HTTPError as e:
            raise OAuthError(f"HTTP error during token refresh: {e}") from e
        except OAuthError:
            raise
        except Exception as e:
            raise OAuthError(f"Unexpected error during token refresh: {e}") from e

        if not token:
            raise OAuthError("Token response did not include an access_token")
        return token
