"""
Google OAuth client for sign-in.

Authorization-code flow: build the consent URL, exchange the returned
code for tokens, then read the user's OpenID profile.
"""

import logging
from urllib.parse import urlencode

import httpx

from backend.config import settings

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class OAuthError(Exception):
    """Raised when the provider rejects or fails a sign-in step."""


class GoogleOAuthClient:
    """Thin httpx wrapper around Google's OAuth 2.0 endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_url = redirect_url
        self.timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorization_url(self, state: str) -> str:
        """Consent screen URL the browser is sent to."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_url,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
            "prompt": "select_account",
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)

    def exchange_code(self, code: str) -> dict:
        """Trade an authorization code for a token response."""
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_url,
            "grant_type": "authorization_code",
        }
        try:
            with self._client() as client:
                response = client.post(TOKEN_URL, data=data, headers={"Accept": "application/json"})
                response.raise_for_status()
                tokens = response.json()
        except httpx.HTTPStatusError as e:
            raise OAuthError(f"Token exchange HTTP error: {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise OAuthError(f"Token exchange failed: {e}") from e

        if not tokens.get("access_token"):
            raise OAuthError("Token response has no access_token")
        return tokens

    def fetch_userinfo(self, access_token: str) -> dict:
        """Read the OpenID profile for an access token."""
        try:
            with self._client() as client:
                response = client.get(USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"})
                response.raise_for_status()
                info = response.json()
        except httpx.HTTPStatusError as e:
            raise OAuthError(f"Userinfo HTTP error: {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise OAuthError(f"Userinfo request failed: {e}") from e

        if not info.get("sub"):
            raise OAuthError("Userinfo response has no subject")
        return info

    def sign_in(self, code: str) -> dict:
        """Exchange the code and return the signed-in user's profile."""
        tokens = self.exchange_code(code)
        info = self.fetch_userinfo(tokens["access_token"])
        logger.info(f"OAuth sign-in succeeded for {info.get('email', '<no email>')}")
        return info


def get_oauth_client() -> GoogleOAuthClient:
    """FastAPI dependency returning a client built from settings."""
    return GoogleOAuthClient(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        redirect_url=settings.oauth_redirect_url,
        timeout=settings.oauth_timeout,
    )
