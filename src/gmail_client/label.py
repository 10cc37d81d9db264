"""Gmail label model and the fixed system label ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

SYSTEM = "system"
USER = "user"

LABEL_SHOW = "labelShow"
LABEL_SHOW_IF_UNREAD = "labelShowIfUnread"
LABEL_HIDE = "labelHide"

_FIELDS = {
    "id": "id",
    "name": "name",
    "type": "type",
    "message_list_visibility": "messageListVisibility",
    "label_list_visibility": "labelListVisibility",
    "messages_total": "messagesTotal",
    "messages_unread": "messagesUnread",
    "threads_total": "threadsTotal",
    "threads_unread": "threadsUnread",
    "color": "color",
}


@dataclass(eq=False)
class Label:
    """A Gmail label. Compares and hashes by id, and equals its id string."""

    id: str
    name: str
    type: str | None = None
    message_list_visibility: str | None = None
    label_list_visibility: str | None = None
    messages_total: int | None = None
    messages_unread: int | None = None
    threads_total: int | None = None
    threads_unread: int | None = None
    color: dict[str, str] | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Label:
        values = {attr: data.get(key) for attr, key in _FIELDS.items()}
        values["id"] = data["id"]
        values["name"] = data.get("name", data["id"])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """API-shaped dict containing only the fields that are set."""
        return {
            key: getattr(self, attr)
            for attr, key in _FIELDS.items()
            if getattr(self, attr) is not None
        }

    @property
    def is_system(self) -> bool:
        return self.type == SYSTEM

    @property
    def is_user(self) -> bool:
        return not self.is_system

    @property
    def is_hidden(self) -> bool:
        return self.label_list_visibility == LABEL_HIDE

    @property
    def is_visible(self) -> bool:
        return not self.is_hidden

    @property
    def has_messages(self) -> bool:
        return bool(self.messages_total)

    @property
    def has_unread(self) -> bool:
        return bool(self.messages_unread)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Label):
            return self.id == other.id
        if isinstance(other, str):
            return self.id == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Label(id={self.id!r}, name={self.name!r})"


INBOX = Label("INBOX", "INBOX", SYSTEM)
SENT = Label("SENT", "SENT", SYSTEM)
DRAFT = Label("DRAFT", "DRAFT", SYSTEM)
TRASH = Label("TRASH", "TRASH", SYSTEM)
SPAM = Label("SPAM", "SPAM", SYSTEM)
STARRED = Label("STARRED", "STARRED", SYSTEM)
IMPORTANT = Label("IMPORTANT", "IMPORTANT", SYSTEM)
UNREAD = Label("UNREAD", "UNREAD", SYSTEM)

SYSTEM_LABELS = (INBOX, SENT, DRAFT, TRASH, SPAM, STARRED, IMPORTANT, UNREAD)
