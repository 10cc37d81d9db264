"""Tests for the OAuth token model."""

from datetime import datetime, timedelta, timezone

from gmail_client.models import Token

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_token_without_expiry_never_expires():
    token = Token("abc")
    assert token.has_expired() is False
    assert token.expires_in() is None
    assert token.token_type == "Bearer"


def test_token_expiry():
    token = Token("abc", expires_at=NOW + timedelta(minutes=1))
    assert token.has_expired(now=NOW) is False
    assert token.has_expired(now=NOW + timedelta(minutes=2)) is True
    assert token.expires_in(now=NOW) == 60
    assert token.expires_in(now=NOW + timedelta(hours=1)) == 0


def test_from_api_response_splits_scope():
    token = Token.from_api_response(
        {
            "access_token": "ya29.x",
            "refresh_token": "1//r",
            "token_type": "Bearer",
            "expires_in": 3599,
            "scope": "https://www.googleapis.com/auth/gmail.readonly "
                     "https://www.googleapis.com/auth/gmail.send",
        },
        now=NOW,
    )
    assert token.access_token == "ya29.x"
    assert token.can_refresh()
    assert token.expires_at == NOW + timedelta(seconds=3599)
    assert token.scopes == [
        "https://www.googleapis.com/auth/gmail.readonly",
        "https://www.googleapis.com/auth/gmail.send",
    ]


def test_from_api_response_minimal():
    token = Token.from_api_response({"access_token": "only"})
    assert token.refresh_token is None
    assert token.expires_at is None
    assert token.scopes == []
    assert not token.can_refresh()
    assert token.authorization_header() == "Bearer only"
