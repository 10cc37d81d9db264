"""GmailClient: wires the connector, config and services together."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from gmail_client.config import GmailConfig
from gmail_client.connector import GmailConnector
from gmail_client.label import Label
from gmail_client.models import Email, Token
from gmail_client.pagination import LazySequence, Paginator
from gmail_client.services import (
    AuthService,
    LabelService,
    MessageService,
    StatisticsService,
)

logger = logging.getLogger(__name__)


class GmailClient:
    """Entry point for the Gmail REST API.

    The services are available as ``client.messages``, ``client.labels``,
    ``client.auth`` and ``client.statistics``; the most common operations
    are also exposed directly on the client.

    Args:
        config: Client configuration (``GmailConfig()`` if omitted).
        access_token: Optional token applied to the connector immediately.
        refresh_token: Optional refresh token stored alongside it.
        connector: Pre-built connector; one is created from ``config`` if omitted.
        transport: httpx transport for the created connector (tests).
    """

    def __init__(
        self,
        config: GmailConfig | None = None,
        access_token: str | None = None,
        refresh_token: str | None = None,
        connector: GmailConnector | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config or GmailConfig()
        self.connector = connector or GmailConnector(
            timeout=self.config.performance.api_timeout, transport=transport,
        )

        self.auth = AuthService(self.connector, self.config)
        self.messages = MessageService(self.connector, self.config)
        self.labels = LabelService(self.connector, self.config)
        self.statistics = StatisticsService(self.connector, self.config)

        if access_token:
            self.auth.authenticate(access_token, refresh_token)

    @classmethod
    def from_env(cls, **kwargs: Any) -> GmailClient:
        """Build from ``GMAIL_*`` variables, including ``GMAIL_ACCESS_TOKEN``."""
        kwargs.setdefault("config", GmailConfig.from_env())
        kwargs.setdefault("access_token", os.environ.get("GMAIL_ACCESS_TOKEN"))
        kwargs.setdefault("refresh_token", os.environ.get("GMAIL_REFRESH_TOKEN"))
        return cls(**kwargs)

    # Auth

    def authenticate(self, access_token: str, refresh_token: str | None = None) -> Token:
        return self.auth.authenticate(access_token, refresh_token)

    def get_authorization_url(self, redirect_uri: str | None = None, **kwargs) -> str:
        return self.auth.get_authorization_url(redirect_uri, **kwargs)

    def exchange_code(self, code: str, redirect_uri: str | None = None) -> Token:
        return self.auth.exchange_code(code, redirect_uri)

    def refresh_token(self, refresh_token: str | None = None) -> Token:
        return self.auth.refresh_token(refresh_token)

    # Messages

    def list_messages(self, *args, **kwargs) -> list[Email] | Paginator | LazySequence:
        return self.messages.list_messages(*args, **kwargs)

    def safe_list_messages(self, *args, **kwargs) -> list[Email] | Paginator | LazySequence:
        return self.messages.safe_list_messages(*args, **kwargs)

    def get_message(self, message_id: str) -> Email:
        return self.messages.get_message(message_id)

    def safe_get_message(self, message_id: str) -> Email | None:
        return self.messages.safe_get_message(message_id)

    def send_email(self, to, subject: str, body: str, **options) -> Email:
        return self.messages.send_email(to, subject, body, **options)

    def modify_message_labels(
        self, message_id: str, add_label_ids=None, remove_label_ids=None,
    ) -> Email:
        return self.messages.modify_message_labels(
            message_id, add_label_ids, remove_label_ids,
        )

    # Labels

    def list_labels(self, *args, **kwargs) -> list[Label] | Paginator | LazySequence:
        return self.labels.list_labels(*args, **kwargs)

    def safe_list_labels(self, *args, **kwargs) -> list[Label] | Paginator | LazySequence:
        return self.labels.safe_list_labels(*args, **kwargs)

    def get_label(self, label_id: str) -> Label:
        return self.labels.get_label(label_id)

    def create_label(self, name: str, **options) -> Label:
        return self.labels.create_label(name, **options)

    def update_label(self, label_id: str, **updates) -> Label:
        return self.labels.update_label(label_id, **updates)

    def delete_label(self, label_id: str) -> None:
        self.labels.delete_label(label_id)

    # Statistics

    def get_account_statistics(self, **options) -> dict[str, Any]:
        return self.statistics.get_account_statistics(**options)

    def safe_get_account_statistics(self, **options) -> dict[str, Any]:
        return self.statistics.safe_get_account_statistics(**options)

    def get_account_health(self) -> dict[str, Any]:
        return self.statistics.get_account_health()

    def get_account_summary(self) -> dict[str, Any]:
        return self.statistics.get_account_summary()

    def is_connected(self) -> bool:
        return self.statistics.is_connected()

    # Lifecycle

    def close(self) -> None:
        self.connector.close()

    def __enter__(self) -> GmailClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
