"""OAuth2 authorization URL, code exchange and token refresh."""

from __future__ import annotations

import logging
from datetime import datetime
from urllib.parse import urlencode

from gmail_client import resources
from gmail_client.config import DEFAULT_SCOPES
from gmail_client.connector import Response
from gmail_client.exceptions import (
    AuthenticationError,
    ConfigurationError,
    raise_for_status,
)
from gmail_client.models import Token
from gmail_client.services.base import Service

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"


class AuthService(Service):
    """Applies credentials to the connector and talks to the token endpoint.

    Tokens obtained here are set on the connector straight away; storing
    them between runs is the caller's job.
    """

    def authenticate(
        self,
        access_token: str,
        refresh_token: str | None = None,
        expires_at: datetime | None = None,
    ) -> Token:
        if not access_token:
            raise AuthenticationError.missing_token()
        token = Token(access_token, refresh_token, expires_at=expires_at)
        self.connector.authenticate(token)
        return token

    def current_token(self) -> Token | None:
        return self.connector.token

    def is_authenticated(self) -> bool:
        token = self.connector.token
        return token is not None and not token.has_expired()

    def get_authorization_url(
        self,
        redirect_uri: str | None = None,
        scopes: list[str] | None = None,
        **params: str,
    ) -> str:
        client_id = self._require("client_id")
        redirect_uri = redirect_uri or self._require("redirect_uri")

        query = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes or self.config.scopes or DEFAULT_SCOPES),
            "access_type": "offline",
            "prompt": "consent",
        }
        query.update(params)
        return f"{AUTHORIZATION_URL}?{urlencode(query)}"

    def exchange_code(self, code: str, redirect_uri: str | None = None) -> Token:
        request = resources.exchange_code(
            code,
            self._require("client_id"),
            self._require("client_secret"),
            redirect_uri or self._require("redirect_uri"),
        )
        token = self._token_from(self.connector.send(request))
        self.connector.authenticate(token)
        logger.info("Exchanged authorization code for access token")
        return token

    def refresh_token(self, refresh_token: str | None = None) -> Token:
        current = self.connector.token
        refresh_token = refresh_token or (current.refresh_token if current else None)
        if not refresh_token:
            raise AuthenticationError.refresh_failed("No refresh token available")

        request = resources.refresh_token(
            refresh_token,
            self._require("client_id"),
            self._require("client_secret"),
        )
        token = self._token_from(self.connector.send(request))
        if not token.refresh_token:
            # Google usually omits refresh_token on refresh
            token.refresh_token = refresh_token
        self.connector.authenticate(token)
        logger.info("Refreshed access token")
        return token

    def _token_from(self, response: Response) -> Token:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if "error" in data:
            error = data["error"]
            if isinstance(error, dict):
                error = error.get("status") or error.get("message")
            raise AuthenticationError.oauth_error(
                str(error), data.get("error_description"), response,
            )
        raise_for_status(response)
        if not data.get("access_token"):
            raise AuthenticationError.oauth_error(
                "invalid_response", "Token response did not include an access_token",
                response,
            )
        return Token.from_api_response(data)

    def _require(self, name: str) -> str:
        value = getattr(self.config, name)
        if not value:
            raise ConfigurationError(
                f"Gmail {name} is not configured. "
                f"Set GMAIL_{name.upper()} or pass it in GmailConfig."
            )
        return value
