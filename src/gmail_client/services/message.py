"""Message listing, retrieval, sending and label changes."""

from __future__ import annotations

import base64
import logging
from datetime import date, datetime
from email.mime.text import MIMEText
from email.utils import formataddr
from functools import partial
from typing import Any

from gmail_client import query as gmail_query
from gmail_client import resources
from gmail_client.contact import Contact, is_valid_email
from gmail_client.exceptions import ValidationError
from gmail_client.hydration import fetch_or_minimal, hydrate
from gmail_client.label import STARRED, UNREAD
from gmail_client.models import Email
from gmail_client.pagination import LazySequence, Paginator, iter_items
from gmail_client.safe import safe, safe_stream
from gmail_client.services.base import Service

logger = logging.getLogger(__name__)

MESSAGE = "Message"


def _query_params(query: str | dict[str, Any] | None) -> dict[str, Any]:
    """Accept a Gmail search string or a dict of list parameters."""
    if query is None:
        return {}
    if isinstance(query, str):
        return {"q": query} if query else {}
    return dict(query)


def _list_request(
    params: dict[str, Any], max_results: int, page_token: str | None,
):
    return resources.list_messages(params, max_results, page_token)


def _label_ids(labels) -> list[str]:
    return [str(getattr(lbl, "id", lbl)) for lbl in labels or []]


def _header_value(contacts: list[Contact]) -> str:
    """Address header with only the display names RFC 2047 encoded."""
    return ", ".join(
        formataddr((contact.name, contact.email), charset="utf-8") for contact in contacts
    )


def _recipients(field_name: str, value: str | list[str] | None) -> list[Contact]:
    """Parse and validate a recipient header value."""
    if not value:
        return []
    if isinstance(value, str):
        contacts = Contact.parse_many(value)
    else:
        contacts = [Contact.parse(v) for v in value]
    for contact in contacts:
        if not is_valid_email(contact.email):
            raise ValidationError.invalid_email(field_name, contact.email)
    return contacts


class MessageService(Service):
    """Gmail message operations.

    Read operations have ``safe_*`` twins that log and return an empty
    result of the same shape instead of raising.
    """

    # Listing

    def list_messages(
        self,
        query: str | dict[str, Any] | None = None,
        paginate: bool = False,
        max_results: int | None = None,
        lazy: bool = False,
        full_details: bool = True,
    ) -> list[Email] | Paginator | LazySequence:
        """List messages.

        Returns a ``LazySequence`` of ``Email`` when ``lazy``, a ``Paginator``
        of raw refs when ``paginate``, and otherwise a list of ``Email`` for
        the first page. ``full_details=False`` skips per-message fetches and
        returns minimal emails.
        """
        page_size = self.config.performance.page_size(max_results)
        build = partial(_list_request, _query_params(query))

        if lazy:
            return self._stream_messages(build, page_size, full_details)
        if paginate:
            return Paginator(self.connector, build, "messages", page_size, MESSAGE)

        response = self._send(build(page_size, None), MESSAGE)
        refs = response.json().get("messages")
        if not isinstance(refs, list):
            refs = []
        logger.info(f"Listed {len(refs)} messages")
        return hydrate(refs, self.get_message, full_details, self.config.performance)

    def _stream_messages(
        self, build, page_size: int, full_details: bool,
    ) -> LazySequence:
        def stream():
            for ref in iter_items(self.connector, build, "messages", page_size, MESSAGE):
                if full_details:
                    yield fetch_or_minimal(ref, self.get_message)
                else:
                    yield Email.from_ref(ref)

        return LazySequence(stream)

    def _empty_listing(
        self,
        query: str | dict[str, Any] | None = None,
        paginate: bool = False,
        max_results: int | None = None,
        lazy: bool = False,
        full_details: bool = True,
    ) -> list[Email] | Paginator | LazySequence:
        if lazy:
            return LazySequence.empty()
        if paginate:
            return Paginator(
                self.connector,
                partial(_list_request, _query_params(query)),
                "messages",
                self.config.performance.page_size(max_results),
                MESSAGE,
            )
        return []

    def get_message(self, message_id: str) -> Email:
        response = self._send(resources.get_message(message_id), MESSAGE, message_id)
        return Email.from_api_response(response.json())

    @safe(_empty_listing, "messages.list")
    def safe_list_messages(
        self,
        query: str | dict[str, Any] | None = None,
        paginate: bool = False,
        max_results: int | None = None,
        lazy: bool = False,
        full_details: bool = True,
    ) -> list[Email] | Paginator | LazySequence:
        result = self.list_messages(query, paginate, max_results, lazy, full_details)
        if isinstance(result, LazySequence):
            return safe_stream(result, "messages.list")
        return result

    safe_get_message = safe(None, "messages.get")(get_message)

    # Search helpers

    def search(
        self, query: str, max_results: int | None = None, full_details: bool = True,
    ) -> list[Email]:
        return self.list_messages(
            query, max_results=max_results, full_details=full_details,
        )

    def find_unread(self, max_results: int | None = None) -> list[Email]:
        return self.search(gmail_query.build_query(unread=True), max_results)

    def find_starred(self, max_results: int | None = None) -> list[Email]:
        return self.search(gmail_query.build_query(starred=True), max_results)

    def find_in_label(self, label_id, max_results: int | None = None) -> list[Email]:
        return self.list_messages(
            {"labelIds": _label_ids([label_id])}, max_results=max_results,
        )

    def find_from_sender(self, address: str, max_results: int | None = None) -> list[Email]:
        return self.search(gmail_query.build_query(sender=address), max_results)

    def find_by_subject(self, subject: str, max_results: int | None = None) -> list[Email]:
        return self.search(gmail_query.build_query(subject=subject), max_results)

    def find_in_date_range(
        self,
        start: date | datetime | str,
        end: date | datetime | str,
        max_results: int | None = None,
    ) -> list[Email]:
        return self.search(gmail_query.date_range(start, end), max_results)

    def count(self, query: str | dict[str, Any] | None = None) -> int:
        """The API's ``resultSizeEstimate`` for a query (an estimate, not exact)."""
        response = self._send(
            resources.list_messages(_query_params(query), max_results=1), MESSAGE,
        )
        return int(response.json().get("resultSizeEstimate", 0))

    # Sending

    def send_email(
        self,
        to: str | list[str],
        subject: str,
        body: str,
        *,
        from_email: str | None = None,
        from_name: str | None = None,
        cc: str | list[str] | None = None,
        bcc: str | list[str] | None = None,
        html: bool = False,
    ) -> Email:
        """Send a message. Addresses are validated before any request is made."""
        recipients = _recipients("to", to)
        if not recipients:
            raise ValidationError.missing_required_field("to")
        if not subject or not subject.strip():
            raise ValidationError.missing_required_field("subject")

        from_email = from_email or self.config.from_email
        if not from_email:
            raise ValidationError.missing_required_field("from")
        if not is_valid_email(from_email):
            raise ValidationError.invalid_email("from", from_email)
        sender = Contact(from_email, from_name or self.config.from_name)

        cc_contacts = _recipients("cc", cc)
        bcc_contacts = _recipients("bcc", bcc)

        message = MIMEText(body, "html" if html else "plain", "utf-8")
        message["From"] = _header_value([sender])
        message["To"] = _header_value(recipients)
        message["Subject"] = subject
        if cc_contacts:
            message["Cc"] = _header_value(cc_contacts)
        if bcc_contacts:
            message["Bcc"] = _header_value(bcc_contacts)

        raw = base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")
        response = self._send(resources.send_message(raw), MESSAGE)
        logger.info(f"Sent message to {len(recipients)} recipient(s)")
        return Email.from_api_response(response.json())

    # Labels

    def modify_message_labels(
        self,
        message_id: str,
        add_label_ids: list | None = None,
        remove_label_ids: list | None = None,
    ) -> Email:
        request = resources.modify_message_labels(
            message_id, _label_ids(add_label_ids), _label_ids(remove_label_ids),
        )
        response = self._send(request, MESSAGE, message_id)
        return Email.from_api_response(response.json())

    def add_labels(self, message_id: str, label_ids: list) -> Email:
        return self.modify_message_labels(message_id, add_label_ids=label_ids)

    def remove_labels(self, message_id: str, label_ids: list) -> Email:
        return self.modify_message_labels(message_id, remove_label_ids=label_ids)

    def mark_as_read(self, message_id: str) -> Email:
        return self.remove_labels(message_id, [UNREAD])

    def mark_as_unread(self, message_id: str) -> Email:
        return self.add_labels(message_id, [UNREAD])

    def star(self, message_id: str) -> Email:
        return self.add_labels(message_id, [STARRED])

    def unstar(self, message_id: str) -> Email:
        return self.remove_labels(message_id, [STARRED])

    # Trash / delete

    def trash_message(self, message_id: str) -> Email:
        response = self._send(resources.trash_message(message_id), MESSAGE, message_id)
        return Email.from_api_response(response.json())

    def untrash_message(self, message_id: str) -> Email:
        response = self._send(resources.untrash_message(message_id), MESSAGE, message_id)
        return Email.from_api_response(response.json())

    def delete_message(self, message_id: str) -> None:
        """Permanently delete a message, bypassing ``TRASH``."""
        self._send(resources.delete_message(message_id), MESSAGE, message_id)
        logger.info(f"Deleted message {message_id}")
