"""Label CRUD plus filtering helpers over the account's label list."""

from __future__ import annotations

import logging
from typing import Any

from gmail_client import resources
from gmail_client.label import LABEL_SHOW, Label
from gmail_client.pagination import LazySequence, Paginator
from gmail_client.safe import safe, safe_stream
from gmail_client.services.base import Service

logger = logging.getLogger(__name__)

LABEL = "Label"

# snake_case update keys accepted by update_label
_UPDATE_KEYS = {
    "name": "name",
    "message_list_visibility": "messageListVisibility",
    "label_list_visibility": "labelListVisibility",
    "color": "color",
}


def _list_request(max_results: int, page_token: str | None):
    return resources.list_labels(max_results, page_token)


class LabelService(Service):
    """Gmail label operations."""

    def list_labels(
        self,
        paginate: bool = False,
        lazy: bool = False,
        max_results: int | None = None,
    ) -> list[Label] | Paginator | LazySequence:
        """List labels.

        ``lazy`` yields each label re-fetched with ``get_label`` so counts
        are populated; ``paginate`` returns a ``Paginator`` of raw dicts.
        """
        if lazy:
            return LazySequence(self._stream_labels)
        if paginate:
            return Paginator(
                self.connector,
                _list_request,
                "labels",
                self.config.performance.page_size(max_results),
                LABEL,
            )

        response = self._send(resources.list_labels(max_results), LABEL)
        labels = response.json().get("labels")
        if not isinstance(labels, list):
            return []
        return [Label.from_api_response(item) for item in labels]

    def _stream_labels(self):
        for label in self.list_labels():
            yield self.get_label(label.id)

    def _empty_listing(
        self,
        paginate: bool = False,
        lazy: bool = False,
        max_results: int | None = None,
    ) -> list[Label] | Paginator | LazySequence:
        if lazy:
            return LazySequence.empty()
        if paginate:
            return Paginator(
                self.connector,
                _list_request,
                "labels",
                self.config.performance.page_size(max_results),
                LABEL,
            )
        return []

    def get_label(self, label_id: str) -> Label:
        response = self._send(resources.get_label(label_id), LABEL, label_id)
        return Label.from_api_response(response.json())

    @safe(_empty_listing, "labels.list")
    def safe_list_labels(
        self,
        paginate: bool = False,
        lazy: bool = False,
        max_results: int | None = None,
    ) -> list[Label] | Paginator | LazySequence:
        result = self.list_labels(paginate, lazy, max_results)
        if isinstance(result, LazySequence):
            return safe_stream(result, "labels.list")
        return result

    safe_get_label = safe(None, "labels.get")(get_label)

    def create_label(
        self,
        name: str,
        *,
        message_list_visibility: str = "show",
        label_list_visibility: str = LABEL_SHOW,
        background_color: str | None = None,
        text_color: str | None = None,
    ) -> Label:
        body: dict[str, Any] = {
            "name": name,
            "messageListVisibility": message_list_visibility,
            "labelListVisibility": label_list_visibility,
        }
        if background_color or text_color:
            body["color"] = {
                k: v for k, v in (
                    ("backgroundColor", background_color),
                    ("textColor", text_color),
                ) if v
            }

        response = self._send(resources.create_label(body), LABEL)
        label = Label.from_api_response(response.json())
        logger.info(f"Created label {label.name!r} ({label.id})")
        return label

    def update_label(self, label_id: str, **updates: Any) -> Label:
        """Patch a label. Accepts snake_case or API field names."""
        body = {_UPDATE_KEYS.get(key, key): value for key, value in updates.items()}
        response = self._send(resources.update_label(label_id, body), LABEL, label_id)
        return Label.from_api_response(response.json())

    def delete_label(self, label_id: str) -> None:
        self._send(resources.delete_label(label_id), LABEL, label_id)
        logger.info(f"Deleted label {label_id}")

    # Filtering helpers

    def find_by_name(self, name: str) -> Label | None:
        wanted = name.lower()
        return next(
            (lbl for lbl in self.list_labels() if lbl.name.lower() == wanted), None,
        )

    def exists(self, label_id: str) -> bool:
        return self.safe_get_label(label_id) is not None

    def system_labels(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.is_system]

    def user_labels(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.is_user]

    def visible_labels(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.is_visible]

    def hidden_labels(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.is_hidden]

    def labels_with_messages(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.has_messages]

    def labels_with_unread(self) -> list[Label]:
        return [lbl for lbl in self.list_labels() if lbl.has_unread]

    def statistics(self) -> dict[str, int]:
        """Counts over a single label listing."""
        labels = self.list_labels()
        return {
            "total": len(labels),
            "system": sum(1 for lbl in labels if lbl.is_system),
            "user": sum(1 for lbl in labels if lbl.is_user),
            "visible": sum(1 for lbl in labels if lbl.is_visible),
            "hidden": sum(1 for lbl in labels if lbl.is_hidden),
            "with_messages": sum(1 for lbl in labels if lbl.has_messages),
            "with_unread": sum(1 for lbl in labels if lbl.has_unread),
            "total_messages": sum(lbl.messages_total or 0 for lbl in labels),
            "total_unread": sum(lbl.messages_unread or 0 for lbl in labels),
        }
