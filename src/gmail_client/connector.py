"""HTTP transport for the Gmail REST API built on httpx."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import httpx

from gmail_client.exceptions import TransportError

if TYPE_CHECKING:
    from gmail_client.models import Token

logger = logging.getLogger(__name__)

BASE_URL = "https://gmail.googleapis.com/gmail/v1"
TOKEN_URL = "https://oauth2.googleapis.com/token"

API = "api"
TOKEN = "token"


@dataclass
class Request:
    """Description of one API call, resolved against the base or token URL."""

    method: str
    path: str = ""
    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] | None = None
    form: dict[str, str] | None = None
    endpoint: str = API
    timeout: float | None = None

    def with_query(self, **params: Any) -> Request:
        """Copy of this request with extra query parameters (``None`` dropped)."""
        query = dict(self.query)
        query.update({k: v for k, v in params.items() if v is not None})
        return replace(self, query=query)

    def with_timeout(self, timeout: float | None) -> Request:
        return replace(self, timeout=timeout)


class Response:
    """Thin view over ``httpx.Response``."""

    def __init__(self, raw: httpx.Response):
        self.raw = raw

    @property
    def status(self) -> int:
        return self.raw.status_code

    @property
    def successful(self) -> bool:
        return 200 <= self.raw.status_code < 300

    def header(self, name: str) -> str | list[str] | None:
        values = self.raw.headers.get_list(name)
        if not values:
            return None
        if len(values) == 1:
            return values[0]
        return values

    def json(self) -> Any:
        if not self.raw.content:
            return {}
        return self.raw.json()

    def __repr__(self) -> str:
        return f"<Response [{self.status}]>"


class GmailConnector:
    """Sends ``Request`` descriptors and carries the active credentials.

    Args:
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
        base_url: Gmail REST root.
        token_url: OAuth2 token endpoint.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        base_url: str = BASE_URL,
        token_url: str = TOKEN_URL,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_url = token_url
        self.token: Token | None = None
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def authenticate(self, token: Token) -> None:
        self.token = token
        logger.debug("Connector credentials updated")

    def is_authenticated(self) -> bool:
        return self.token is not None

    def resolve(self, request: Request) -> str:
        if request.endpoint == TOKEN:
            return self.token_url
        return f"{self.base_url}/{request.path.lstrip('/')}"

    def send(self, request: Request) -> Response:
        url = self.resolve(request)
        headers = {"Accept": "application/json"}
        if self.token is not None and request.endpoint == API:
            headers["Authorization"] = self.token.authorization_header()

        logger.debug(f"{request.method} {url} params={request.query}")
        try:
            raw = self._client.request(
                request.method,
                url,
                params=request.query or None,
                json=request.body,
                data=request.form,
                headers=headers,
                timeout=(
                    request.timeout
                    if request.timeout is not None
                    else httpx.USE_CLIENT_DEFAULT
                ),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        return Response(raw)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GmailConnector:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
