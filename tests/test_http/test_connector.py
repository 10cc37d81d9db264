"""Tests for the httpx connector and request builders."""

import httpx
import pytest

from gmail_client import resources
from gmail_client.connector import GmailConnector, Request, Response
from gmail_client.exceptions import TransportError
from gmail_client.models import Token


def test_send_resolves_against_base_url(make_connector):
    connector = make_connector(lambda request: httpx.Response(200, json={"labels": []}))
    response = connector.send(resources.list_labels())

    assert response.status == 200
    assert response.successful
    sent = connector.calls[0]
    assert str(sent.url) == "https://gmail.googleapis.com/gmail/v1/users/me/labels"
    assert sent.headers["Authorization"] == "Bearer test-token"


def test_token_requests_use_token_url_without_bearer(make_connector):
    connector = make_connector(lambda request: httpx.Response(200, json={}))
    connector.send(resources.refresh_token("r1", "cid", "secret"))

    sent = connector.calls[0]
    assert str(sent.url) == "https://oauth2.googleapis.com/token"
    assert "Authorization" not in sent.headers
    assert b"grant_type=refresh_token" in sent.content


def test_unauthenticated_connector_sends_no_auth_header(make_connector):
    connector = make_connector(lambda request: httpx.Response(200, json={}), token=None)
    connector.send(resources.get_label("INBOX"))
    assert "Authorization" not in connector.calls[0].headers
    assert not connector.is_authenticated()


def test_query_parameters_are_encoded(make_connector):
    connector = make_connector(lambda request: httpx.Response(200, json={}))
    connector.send(resources.list_messages({"q": "is:unread"}, max_results=5, page_token="p2"))

    params = connector.calls[0].url.params
    assert params["q"] == "is:unread"
    assert params["maxResults"] == "5"
    assert params["pageToken"] == "p2"


def test_transport_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    connector = GmailConnector(transport=httpx.MockTransport(handler))
    with pytest.raises(TransportError, match="connection refused"):
        connector.send(resources.list_labels())


def test_response_header_and_empty_json():
    response = Response(httpx.Response(204, headers={"X-RateLimit-Remaining": "42"}))
    assert response.header("x-ratelimit-remaining") == "42"
    assert response.header("Retry-After") is None
    assert response.json() == {}


def test_request_with_query_drops_none():
    request = Request("GET", "users/me/messages").with_query(maxResults=10, pageToken=None)
    assert request.query == {"maxResults": 10}


def test_modify_labels_omits_empty_keys():
    request = resources.modify_message_labels("m1", ["STARRED"], [])
    assert request.body == {"addLabelIds": ["STARRED"]}
    request = resources.modify_message_labels("m1", None, ["UNREAD"])
    assert request.body == {"removeLabelIds": ["UNREAD"]}
    assert request.path == "users/me/messages/m1/modify"


def test_exchange_code_form():
    request = resources.exchange_code("abc", "cid", "secret", "http://localhost/cb")
    assert request.form["grant_type"] == "authorization_code"
    assert request.form["code"] == "abc"
    assert request.body is None


def test_authenticate_sets_token():
    connector = GmailConnector()
    connector.authenticate(Token("xyz", token_type="Bearer"))
    assert connector.is_authenticated()
    connector.close()
