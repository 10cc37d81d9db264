"""Shared fixtures: a connector backed by httpx.MockTransport."""

import base64

import httpx
import pytest

from gmail_client.connector import GmailConnector
from gmail_client.models import Token


@pytest.fixture
def make_connector():
    """Build a connector whose requests go to ``handler``.

    Every request sent is recorded on ``connector.calls``.
    """

    def _make(handler, token="test-token"):
        calls = []

        def record(request):
            calls.append(request)
            return handler(request)

        connector = GmailConnector(transport=httpx.MockTransport(record))
        connector.calls = calls
        if token:
            connector.authenticate(Token(token))
        return connector

    return _make


def message_payload(msg_id, subject="Hello", sender="Alice <alice@example.com>",
                    body="Hi there", labels=("INBOX", "UNREAD")):
    encoded = base64.urlsafe_b64encode(body.encode()).decode().rstrip("=")
    return {
        "id": msg_id,
        "threadId": f"t-{msg_id}",
        "labelIds": list(labels),
        "snippet": body[:20],
        "sizeEstimate": 1024,
        "internalDate": "1704110400000",
        "payload": {
            "mimeType": "text/plain",
            "headers": [
                {"name": "From", "value": sender},
                {"name": "To", "value": "bob@example.com"},
                {"name": "Subject", "value": subject},
            ],
            "body": {"data": encoded},
        },
    }
