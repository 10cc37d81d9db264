"""Tests for exception hierarchy and status mapping."""

import httpx
import pytest

from gmail_client.connector import Response
from gmail_client.errors import (
    AuthenticationErrorRecord,
    ErrorRecord,
    NotFoundErrorRecord,
    RateLimitErrorRecord,
    ValidationErrorRecord,
)
from gmail_client.exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    GmailClientError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
    error_for_response,
    raise_for_status,
)


def _response(status, json=None, headers=None):
    return Response(httpx.Response(status, json=json, headers=headers))


def test_all_inherit_from_base():
    for exc_class in [
        AuthenticationError, NotFoundError, RateLimitError,
        ValidationError, ClientError, ConfigurationError, TransportError,
    ]:
        assert issubclass(exc_class, GmailClientError)


def test_base_error_carries_record():
    err = GmailClientError("boom")
    assert err.error.message == "boom"
    assert err.response is None


def test_raise_for_status_passes_2xx():
    response = _response(200, {"ok": True})
    assert raise_for_status(response) is response


def test_400_maps_to_validation_error():
    response = _response(400, {"error": {"code": 400, "message": "Invalid label"}})
    with pytest.raises(ValidationError, match="Invalid label") as exc:
        raise_for_status(response)
    assert isinstance(exc.value.error, ValidationErrorRecord)
    assert exc.value.response is response


def test_401_maps_to_invalid_token():
    with pytest.raises(AuthenticationError, match="invalid or has expired") as exc:
        raise_for_status(_response(401, {"error": {"code": 401}}))
    assert exc.value.error.code == "invalid_token"


def test_404_maps_to_not_found_with_resource():
    with pytest.raises(NotFoundError) as exc:
        raise_for_status(_response(404, {}), "Message", "abc")
    assert str(exc.value) == "Message with ID 'abc' not found"
    assert exc.value.error.resource_type == "Message"
    assert exc.value.error.resource_id == "abc"


def test_429_with_retry_after_seconds():
    response = _response(429, {}, headers={"Retry-After": "60"})
    with pytest.raises(RateLimitError) as exc:
        raise_for_status(response)
    assert exc.value.retry_after == 60
    assert exc.value.error.code == "rate_limit_exceeded"


def test_429_without_header_uses_default():
    err = error_for_response(_response(429, {}))
    assert isinstance(err, RateLimitError)
    assert err.retry_after == 60


def test_other_status_maps_to_client_error():
    payload = {"error": {"code": 503, "status": "UNAVAILABLE", "message": "Backend down"}}
    err = error_for_response(_response(503, payload))
    assert isinstance(err, ClientError)
    assert err.status == 503
    assert err.raw_payload == payload
    assert err.error.code == "UNAVAILABLE"
    assert "Backend down" in str(err)


def test_non_json_error_body():
    response = Response(httpx.Response(500, text="<html>oops</html>"))
    err = error_for_response(response)
    assert isinstance(err, ClientError)
    assert err.raw_payload == {}


def test_error_record_from_response_reads_details():
    record = ErrorRecord.from_response({
        "error": {
            "code": 403,
            "message": "Forbidden",
            "details": [{"detail": "Insufficient scope"}],
        }
    })
    assert record.code == "403"
    assert record.message == "Forbidden"
    assert record.detail == "Insufficient scope"
    assert record.service == "Gmail API"


def test_error_record_from_oauth_response():
    record = ErrorRecord.from_response(
        {"error": "invalid_grant", "error_description": "Bad code"}
    )
    assert record.code == "invalid_grant"
    assert record.message == "Bad code"


def test_authentication_record_kinds():
    assert AuthenticationErrorRecord.missing_token().code == "missing_token"
    assert AuthenticationErrorRecord.token_expired().code == "token_expired"
    refresh = AuthenticationErrorRecord.refresh_failed("revoked")
    assert refresh.code == "refresh_failed"
    assert refresh.detail == "revoked"
    oauth = AuthenticationErrorRecord.oauth_error("invalid_grant", "Bad code")
    assert oauth.authentication_source == "oauth2"


def test_not_found_record_message():
    record = NotFoundErrorRecord.for_resource("Label", "Label_1")
    assert record.code == "not_found"
    assert record.message == "Label with ID 'Label_1' not found"


def test_rate_limit_records():
    assert RateLimitErrorRecord.with_retry(30).retry_after == 30
    quota = RateLimitErrorRecord.quota_exceeded(250, "minute")
    assert quota.code == "quota_exceeded"
    assert quota.message == "API quota exceeded (250 per minute)"


def test_validation_records():
    assert ValidationErrorRecord.for_field("to", "bad").errors == {"to": "bad"}
    assert ValidationErrorRecord.with_errors({"a": "x", "b": "y"}).errors == {"a": "x", "b": "y"}
    missing = ValidationErrorRecord.missing_required_field("subject")
    assert missing.errors == {"subject": "The subject field is required"}


def test_validation_error_exposes_errors():
    err = ValidationError.invalid_email("to", "nope")
    assert "to" in err.errors


def test_record_to_dict_skips_empty_fields():
    data = NotFoundErrorRecord.for_resource("Message", "m1").to_dict()
    assert data["resource_id"] == "m1"
    assert "detail" not in data
    assert "context" not in data
