"""Service layer: one class per Gmail resource family."""

from gmail_client.services.auth import AuthService
from gmail_client.services.label import LabelService
from gmail_client.services.message import MessageService
from gmail_client.services.statistics import StatisticsOptions, StatisticsService

__all__ = [
    "AuthService",
    "LabelService",
    "MessageService",
    "StatisticsOptions",
    "StatisticsService",
]
