"""Shared plumbing for the service classes."""

from __future__ import annotations

from gmail_client.config import GmailConfig, LoggingConfig
from gmail_client.connector import GmailConnector, Request, Response
from gmail_client.exceptions import raise_for_status


class Service:
    """Holds the connector and config every service needs.

    Args:
        connector: Transport with the active credentials.
        config: Client configuration; defaults apply when omitted.
    """

    def __init__(self, connector: GmailConnector, config: GmailConfig | None = None):
        self.connector = connector
        self.config = config or GmailConfig()

    @property
    def logging_config(self) -> LoggingConfig:
        return self.config.logging

    def _send(
        self,
        request: Request,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> Response:
        return raise_for_status(
            self.connector.send(request), resource_type, resource_id,
        )
