"""Tests for AuthService."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from gmail_client.config import DEFAULT_SCOPES, GmailConfig
from gmail_client.exceptions import AuthenticationError, ConfigurationError
from gmail_client.services.auth import AuthService


def _config(**overrides):
    values = {
        "client_id": "cid",
        "client_secret": "secret",
        "redirect_uri": "http://localhost/callback",
    }
    values.update(overrides)
    return GmailConfig(**values)


def _token_handler(payload, status=200):
    return lambda request: httpx.Response(status, json=payload)


def test_authenticate_applies_token(make_connector):
    connector = make_connector(_token_handler({}), token=None)
    service = AuthService(connector, _config())
    token = service.authenticate("access", "refresh")

    assert connector.token is token
    assert service.is_authenticated()
    assert service.current_token().refresh_token == "refresh"


def test_authenticate_requires_token(make_connector):
    service = AuthService(make_connector(_token_handler({}), token=None), _config())
    with pytest.raises(AuthenticationError) as exc:
        service.authenticate("")
    assert exc.value.error.code == "missing_token"


def test_authorization_url(make_connector):
    service = AuthService(make_connector(_token_handler({})), _config())
    url = service.get_authorization_url(state="xyz")

    parsed = urlparse(url)
    params = {k: v[0] for k, v in parse_qs(parsed.query).items()}
    assert url.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
    assert params["client_id"] == "cid"
    assert params["redirect_uri"] == "http://localhost/callback"
    assert params["response_type"] == "code"
    assert params["access_type"] == "offline"
    assert params["prompt"] == "consent"
    assert params["state"] == "xyz"
    assert params["scope"].split() == DEFAULT_SCOPES


def test_authorization_url_custom_scopes(make_connector):
    service = AuthService(make_connector(_token_handler({})), _config())
    url = service.get_authorization_url("http://other/cb", scopes=["openid"])
    params = parse_qs(urlparse(url).query)
    assert params["scope"] == ["openid"]
    assert params["redirect_uri"] == ["http://other/cb"]


def test_authorization_url_requires_client_id(make_connector):
    service = AuthService(make_connector(_token_handler({})), _config(client_id=None))
    with pytest.raises(ConfigurationError, match="client_id"):
        service.get_authorization_url()


def test_exchange_code_authenticates_connector(make_connector):
    connector = make_connector(_token_handler({
        "access_token": "new-access",
        "refresh_token": "new-refresh",
        "expires_in": 3600,
        "scope": "a b",
    }), token=None)
    token = AuthService(connector, _config()).exchange_code("the-code")

    assert token.access_token == "new-access"
    assert token.scopes == ["a", "b"]
    assert connector.token is token
    form = parse_qs(connector.calls[0].content.decode())
    assert form["grant_type"] == ["authorization_code"]
    assert form["code"] == ["the-code"]
    assert form["redirect_uri"] == ["http://localhost/callback"]


def test_exchange_code_oauth_error(make_connector):
    connector = make_connector(
        _token_handler({"error": "invalid_grant", "error_description": "Bad Request"}, 400),
        token=None,
    )
    with pytest.raises(AuthenticationError, match="OAuth error: Bad Request") as exc:
        AuthService(connector, _config()).exchange_code("bad")
    assert exc.value.error.code == "oauth_error"
    assert connector.token is None


def test_exchange_code_missing_access_token(make_connector):
    connector = make_connector(_token_handler({"token_type": "Bearer"}), token=None)
    with pytest.raises(AuthenticationError, match="access_token"):
        AuthService(connector, _config()).exchange_code("code")


def test_refresh_keeps_existing_refresh_token(make_connector):
    connector = make_connector(_token_handler({"access_token": "fresh", "expires_in": 60}), token=None)
    service = AuthService(connector, _config())
    service.authenticate("stale", "keep-me")

    token = service.refresh_token()
    assert token.access_token == "fresh"
    assert token.refresh_token == "keep-me"
    assert connector.token is token
    form = parse_qs(connector.calls[0].content.decode())
    assert form["grant_type"] == ["refresh_token"]
    assert form["refresh_token"] == ["keep-me"]


def test_refresh_without_refresh_token(make_connector):
    service = AuthService(make_connector(_token_handler({}), token=None), _config())
    with pytest.raises(AuthenticationError) as exc:
        service.refresh_token()
    assert exc.value.error.code == "refresh_failed"


def test_refresh_requires_client_secret(make_connector):
    service = AuthService(make_connector(_token_handler({})), _config(client_secret=None))
    with pytest.raises(ConfigurationError, match="client_secret"):
        service.refresh_token("r")
