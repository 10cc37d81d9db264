"""Data models for gmail-client."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from gmail_client import parser
from gmail_client.contact import Contact
from gmail_client.label import STARRED, UNREAD


@dataclass(frozen=True)
class Email:
    """A Gmail message.

    Minimal instances (``Email.minimal``) carry only ``id`` and
    ``thread_id``; every other field keeps its empty default so minimal
    and fully fetched messages can be handled the same way.
    """

    id: str
    thread_id: str | None = None
    label_ids: tuple[str, ...] = ()
    snippet: str | None = None
    payload: dict[str, Any] = field(default_factory=dict, compare=False)
    size_estimate: int | None = None
    internal_date: int | None = None
    headers: dict[str, str] = field(default_factory=dict, compare=False)
    body: str | None = None
    subject: str | None = None
    sender: str | None = None
    to: str | None = None
    cc: str | None = None
    bcc: str | None = None

    def __post_init__(self):
        # Gmail occasionally repeats label ids
        object.__setattr__(self, "label_ids", tuple(dict.fromkeys(self.label_ids)))

    @classmethod
    def minimal(cls, id: str, thread_id: str | None = None) -> Email:
        return cls(id=id, thread_id=thread_id)

    @classmethod
    def from_ref(cls, ref: dict[str, Any]) -> Email:
        return cls.minimal(ref["id"], ref.get("threadId"))

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Email:
        payload = data.get("payload") or {}
        headers = parser.extract_headers(payload)
        snippet = data.get("snippet")

        return cls(
            id=data["id"],
            thread_id=data.get("threadId"),
            label_ids=tuple(data.get("labelIds") or []),
            snippet=html.unescape(snippet) if snippet is not None else None,
            payload=payload,
            size_estimate=parser.parse_int(data.get("sizeEstimate")),
            internal_date=parser.parse_int(data.get("internalDate")),
            headers=headers,
            body=parser.extract_body(payload) if payload else None,
            subject=headers.get("subject"),
            sender=headers.get("from"),
            to=headers.get("to"),
            cc=headers.get("cc"),
            bcc=headers.get("bcc"),
        )

    @property
    def is_minimal(self) -> bool:
        return not self.payload and self.internal_date is None and not self.label_ids

    @property
    def is_unread(self) -> bool:
        return self.has_label(UNREAD)

    @property
    def is_starred(self) -> bool:
        return self.has_label(STARRED)

    def has_label(self, label_id) -> bool:
        return str(getattr(label_id, "id", label_id)) in self.label_ids

    @property
    def date(self) -> datetime | None:
        if self.internal_date is None:
            return None
        return datetime.fromtimestamp(self.internal_date / 1000, tz=timezone.utc)

    @property
    def has_attachments(self) -> bool:
        return parser.has_attachments(self.payload)

    # Contacts

    @property
    def sender_contact(self) -> Contact | None:
        contacts = Contact.parse_many(self.sender)
        return contacts[0] if contacts else None

    @property
    def recipient_contacts(self) -> list[Contact]:
        return Contact.parse_many(self.to)

    @property
    def cc_contacts(self) -> list[Contact]:
        return Contact.parse_many(self.cc)

    @property
    def bcc_contacts(self) -> list[Contact]:
        return Contact.parse_many(self.bcc)

    @property
    def all_recipients(self) -> list[Contact]:
        return self.recipient_contacts + self.cc_contacts + self.bcc_contacts

    @property
    def all_contacts(self) -> list[Contact]:
        sender = self.sender_contact
        return ([sender] if sender else []) + self.all_recipients

    @property
    def contact_domains(self) -> list[str]:
        return list(dict.fromkeys(c.domain for c in self.all_contacts if c.domain))

    def has_contact_from_domain(self, domain: str) -> bool:
        return any(c.is_from_domain(domain) for c in self.all_contacts)

    def contacts_from_domain(self, domain: str) -> list[Contact]:
        return [c for c in self.all_contacts if c.is_from_domain(domain)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "threadId": self.thread_id,
            "labelIds": list(self.label_ids),
            "snippet": self.snippet,
            "sizeEstimate": self.size_estimate,
            "internalDate": self.internal_date,
            "subject": self.subject,
            "from": self.sender,
            "to": self.to,
            "cc": self.cc,
            "bcc": self.bcc,
            "body": self.body,
        }


@dataclass
class Token:
    """OAuth2 credentials. Persistence is up to the caller."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expires_at: datetime | None = None
    scopes: list[str] = field(default_factory=list)

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], now: datetime | None = None,
    ) -> Token:
        expires_at = None
        if data.get("expires_in") is not None:
            now = now or datetime.now(timezone.utc)
            expires_at = now + timedelta(seconds=int(data["expires_in"]))

        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "Bearer",
            expires_at=expires_at,
            scopes=(data.get("scope") or "").split(),
        )

    def has_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    def expires_in(self, now: datetime | None = None) -> int | None:
        if self.expires_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return max(0, int((self.expires_at - now).total_seconds()))

    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"
