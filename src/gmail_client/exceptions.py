"""Unified exception hierarchy for gmail-client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gmail_client.errors import (
    AuthenticationErrorRecord,
    ErrorRecord,
    NotFoundErrorRecord,
    RateLimitErrorRecord,
    ValidationErrorRecord,
)
from gmail_client.retry_after import parse_retry_after

if TYPE_CHECKING:
    from gmail_client.connector import Response


class GmailClientError(Exception):
    """Base exception for all gmail-client errors."""

    def __init__(
        self,
        message: str = "",
        error: ErrorRecord | None = None,
        response: Response | None = None,
    ):
        if error is None:
            error = ErrorRecord(code="gmail_client_error", message=message)
        super().__init__(message or error.message)
        self.error = error
        self.response = response


class ConfigurationError(GmailClientError):
    """Required client configuration is missing or invalid."""


class TransportError(GmailClientError):
    """The HTTP request could not be completed."""


class AuthenticationError(GmailClientError):
    """Gmail authentication or authorization failure."""

    @classmethod
    def from_record(
        cls, error: AuthenticationErrorRecord, response: Response | None = None,
    ) -> AuthenticationError:
        message = error.message
        if error.detail:
            message = f"{message}: {error.detail}"
        return cls(message, error, response)

    @classmethod
    def invalid_token(cls, response: Response | None = None) -> AuthenticationError:
        return cls(
            "The provided access token is invalid or has expired.",
            AuthenticationErrorRecord.invalid_token(),
            response,
        )

    @classmethod
    def missing_token(cls) -> AuthenticationError:
        return cls.from_record(AuthenticationErrorRecord.missing_token())

    @classmethod
    def token_expired(cls) -> AuthenticationError:
        return cls.from_record(AuthenticationErrorRecord.token_expired())

    @classmethod
    def refresh_failed(cls, reason: str | None = None) -> AuthenticationError:
        return cls.from_record(AuthenticationErrorRecord.refresh_failed(reason))

    @classmethod
    def oauth_error(
        cls, error: str, description: str | None = None,
        response: Response | None = None,
    ) -> AuthenticationError:
        record = AuthenticationErrorRecord.oauth_error(error, description)
        return cls(f"OAuth error: {description or error}", record, response)


class NotFoundError(GmailClientError):
    """The requested message, label or other resource does not exist."""

    @classmethod
    def for_resource(
        cls, resource_type: str, resource_id: str | None,
        response: Response | None = None,
    ) -> NotFoundError:
        record = NotFoundErrorRecord.for_resource(resource_type, resource_id)
        return cls(record.message, record, response)


class RateLimitError(GmailClientError):
    """Gmail API rate limit or quota exceeded."""

    @property
    def retry_after(self) -> int | None:
        return getattr(self.error, "retry_after", None)

    @classmethod
    def with_retry(
        cls, seconds: int, response: Response | None = None,
    ) -> RateLimitError:
        return cls(
            "You have exceeded the Gmail API rate limit. Please try again later.",
            RateLimitErrorRecord.with_retry(seconds),
            response,
        )

    @classmethod
    def quota_exceeded(cls, quota: int, period: str) -> RateLimitError:
        record = RateLimitErrorRecord.quota_exceeded(quota, period)
        return cls(record.message, record)


class ValidationError(GmailClientError):
    """A request was rejected as malformed, locally or by the API."""

    @property
    def errors(self) -> dict[str, str]:
        return getattr(self.error, "errors", {})

    @classmethod
    def for_field(cls, field_name: str, message: str) -> ValidationError:
        record = ValidationErrorRecord.for_field(field_name, message)
        return cls(f"{record.message}: {message}", record)

    @classmethod
    def invalid_email(cls, field_name: str, address: str) -> ValidationError:
        return cls.for_field(field_name, f"Invalid email address: {address!r}")

    @classmethod
    def missing_required_field(cls, field_name: str) -> ValidationError:
        record = ValidationErrorRecord.missing_required_field(field_name)
        return cls(record.detail or record.message, record)


class ClientError(GmailClientError):
    """Any other non-2xx response from the Gmail API."""

    def __init__(
        self,
        message: str = "",
        error: ErrorRecord | None = None,
        response: Response | None = None,
        status: int | None = None,
        raw_payload: Any = None,
    ):
        super().__init__(message, error, response)
        self.status = status
        self.raw_payload = raw_payload


# Status → exception mapping

def _validation(response, payload, resource_type, resource_id):
    base = ErrorRecord.from_response(payload)
    record = ValidationErrorRecord(
        code=base.code,
        message=base.message,
        detail=base.detail,
        context={"status": response.status},
    )
    return ValidationError(f"Invalid request: {record.message}", record, response)


def _authentication(response, payload, resource_type, resource_id):
    return AuthenticationError.invalid_token(response)


def _not_found(response, payload, resource_type, resource_id):
    return NotFoundError.for_resource(resource_type or "Resource", resource_id, response)


def _rate_limited(response, payload, resource_type, resource_id):
    return RateLimitError.with_retry(
        parse_retry_after(response.header("Retry-After")), response,
    )


_STATUS_ERRORS = {
    400: _validation,
    401: _authentication,
    404: _not_found,
    429: _rate_limited,
}


def error_for_response(
    response: Response,
    resource_type: str | None = None,
    resource_id: str | None = None,
) -> GmailClientError:
    """Build the typed exception for a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = {}

    factory = _STATUS_ERRORS.get(response.status)
    if factory is not None:
        return factory(response, payload, resource_type, resource_id)

    record = ErrorRecord.from_response(payload, {"status": response.status})
    return ClientError(
        f"Gmail API request failed with status {response.status}: {record.message}",
        record,
        response,
        status=response.status,
        raw_payload=payload,
    )


def raise_for_status(
    response: Response,
    resource_type: str | None = None,
    resource_id: str | None = None,
) -> Response:
    """Raise the mapped exception unless the response is 2xx."""
    if not response.successful:
        raise error_for_response(response, resource_type, resource_id)
    return response
