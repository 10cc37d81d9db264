"""Gmail REST API client with paginated, lazy and safe read operations.

Imports that pull in httpx or beautifulsoup4 are deferred. Typical use:
    from gmail_client import GmailClient
    client = GmailClient(access_token="...")
    for email in client.list_messages("is:unread", lazy=True, full_details=False):
        ...
"""

# Light imports only (no httpx or bs4)
from gmail_client import label
from gmail_client import query
from gmail_client.config import (
    GmailConfig,
    LoggingConfig,
    PerformanceConfig,
    RateLimitConfig,
)
from gmail_client.contact import Contact
from gmail_client.exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    GmailClientError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from gmail_client.label import Label

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy imports for names that require httpx or beautifulsoup4."""
    if name == "GmailClient":
        from gmail_client.client import GmailClient
        return GmailClient
    if name == "GmailConnector":
        from gmail_client.connector import GmailConnector
        return GmailConnector
    if name in ("Email", "Token"):
        from gmail_client import models
        return getattr(models, name)
    if name in ("Paginator", "LazySequence"):
        from gmail_client import pagination
        return getattr(pagination, name)
    if name == "StatisticsOptions":
        from gmail_client.services.statistics import StatisticsOptions
        return StatisticsOptions
    raise AttributeError(f"module 'gmail_client' has no attribute {name!r}")


__all__ = [
    "GmailClient",
    "GmailConnector",
    "GmailConfig",
    "PerformanceConfig",
    "RateLimitConfig",
    "LoggingConfig",
    "Email",
    "Token",
    "Label",
    "Contact",
    "Paginator",
    "LazySequence",
    "StatisticsOptions",
    "label",
    "query",
    "GmailClientError",
    "AuthenticationError",
    "ClientError",
    "ConfigurationError",
    "NotFoundError",
    "RateLimitError",
    "TransportError",
    "ValidationError",
]
