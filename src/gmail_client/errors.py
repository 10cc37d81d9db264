"""Structured error payloads attached to gmail-client exceptions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

SERVICE_NAME = "Gmail API"

# Authentication error kinds
INVALID_TOKEN = "invalid_token"
MISSING_TOKEN = "missing_token"
REFRESH_FAILED = "refresh_failed"
TOKEN_EXPIRED = "token_expired"
UNAUTHORIZED = "unauthorized"
OAUTH_ERROR = "oauth_error"

_AUTH_MESSAGES = {
    INVALID_TOKEN: "The access token is invalid or has expired",
    MISSING_TOKEN: "No access token was provided for authentication",
    REFRESH_FAILED: "Failed to refresh the access token",
    TOKEN_EXPIRED: "The access token has expired",
    UNAUTHORIZED: "Unauthorized access to the requested resource",
    OAUTH_ERROR: "OAuth authentication process failed",
}


@dataclass
class ErrorRecord:
    """Generic error payload: code, human message and optional detail."""

    code: str
    message: str
    detail: str | None = None
    context: dict[str, Any] = field(default_factory=dict)
    service: str = SERVICE_NAME

    @classmethod
    def from_response(
        cls, payload: Any, context: dict[str, Any] | None = None,
    ) -> ErrorRecord:
        """Build a record from a Gmail API error body.

        The API nests everything under ``error``; ``status`` is preferred
        over the numeric ``code`` because it is the more descriptive token.
        """
        error = payload.get("error", {}) if isinstance(payload, dict) else {}
        if not isinstance(error, dict):
            # OAuth endpoints return {"error": "invalid_grant", ...}
            error = {
                "status": str(error),
                "message": payload.get("error_description", str(error)),
            }

        details = error.get("details") or []
        detail = None
        if details and isinstance(details[0], dict):
            detail = details[0].get("detail")

        return cls(
            code=str(error.get("status") or error.get("code") or "unknown_error"),
            message=error.get("message", "Unknown error"),
            detail=detail,
            context=dict(context or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v not in (None, {})}


@dataclass
class AuthenticationErrorRecord(ErrorRecord):
    authentication_source: str | None = None

    @classmethod
    def from_type(
        cls,
        kind: str,
        detail: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> AuthenticationErrorRecord:
        context = dict(context or {})
        return cls(
            code=kind,
            message=_AUTH_MESSAGES.get(kind, "Authentication error"),
            detail=detail,
            context=context,
            authentication_source=context.get("auth_source"),
        )

    @classmethod
    def invalid_token(cls, detail: str | None = None) -> AuthenticationErrorRecord:
        return cls.from_type(INVALID_TOKEN, detail)

    @classmethod
    def missing_token(cls) -> AuthenticationErrorRecord:
        return cls.from_type(MISSING_TOKEN)

    @classmethod
    def token_expired(cls) -> AuthenticationErrorRecord:
        return cls.from_type(TOKEN_EXPIRED)

    @classmethod
    def refresh_failed(cls, reason: str | None = None) -> AuthenticationErrorRecord:
        return cls.from_type(REFRESH_FAILED, reason)

    @classmethod
    def unauthorized(cls, detail: str | None = None) -> AuthenticationErrorRecord:
        return cls.from_type(UNAUTHORIZED, detail)

    @classmethod
    def oauth_error(
        cls, error: str, description: str | None = None,
    ) -> AuthenticationErrorRecord:
        return cls.from_type(
            OAUTH_ERROR,
            description or error,
            {"auth_source": "oauth2", "oauth_error": error},
        )


@dataclass
class NotFoundErrorRecord(ErrorRecord):
    resource_type: str | None = None
    resource_id: str | None = None

    @classmethod
    def for_resource(
        cls, resource_type: str, resource_id: str | None,
    ) -> NotFoundErrorRecord:
        return cls(
            code="not_found",
            message=f"{resource_type} with ID '{resource_id}' not found",
            resource_type=resource_type,
            resource_id=resource_id,
        )


@dataclass
class RateLimitErrorRecord(ErrorRecord):
    retry_after: int | None = None
    quota: int | None = None
    quota_period: str | None = None

    @classmethod
    def with_retry(cls, seconds: int) -> RateLimitErrorRecord:
        return cls(
            code="rate_limit_exceeded",
            message="Rate limit exceeded",
            detail=f"Retry after {seconds} seconds",
            retry_after=seconds,
        )

    @classmethod
    def quota_exceeded(cls, quota: int, period: str) -> RateLimitErrorRecord:
        return cls(
            code="quota_exceeded",
            message=f"API quota exceeded ({quota} per {period})",
            quota=quota,
            quota_period=period,
        )


@dataclass
class ValidationErrorRecord(ErrorRecord):
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_field(cls, field_name: str, message: str) -> ValidationErrorRecord:
        return cls(
            code="validation_error",
            message=f"Validation failed for field '{field_name}'",
            detail=message,
            errors={field_name: message},
        )

    @classmethod
    def with_errors(cls, errors: dict[str, str]) -> ValidationErrorRecord:
        return cls(
            code="validation_error",
            message="Validation failed",
            errors=dict(errors),
        )

    @classmethod
    def missing_required_field(cls, field_name: str) -> ValidationErrorRecord:
        return cls.for_field(field_name, f"The {field_name} field is required")
