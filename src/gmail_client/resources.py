"""Request builders for the Gmail message, label and token endpoints.

Pure construction: no I/O and no response handling.
"""

from __future__ import annotations

from typing import Any

from gmail_client.connector import TOKEN, Request

USER = "users/me"


# Messages

def list_messages(
    query: dict[str, Any] | None = None,
    max_results: int | None = None,
    page_token: str | None = None,
) -> Request:
    return Request("GET", f"{USER}/messages", dict(query or {})).with_query(
        maxResults=max_results, pageToken=page_token,
    )


def get_message(message_id: str, format: str = "full") -> Request:
    return Request("GET", f"{USER}/messages/{message_id}", {"format": format})


def send_message(raw: str) -> Request:
    return Request("POST", f"{USER}/messages/send", body={"raw": raw})


def modify_message_labels(
    message_id: str,
    add_label_ids: list[str] | None = None,
    remove_label_ids: list[str] | None = None,
) -> Request:
    body: dict[str, Any] = {}
    if add_label_ids:
        body["addLabelIds"] = list(add_label_ids)
    if remove_label_ids:
        body["removeLabelIds"] = list(remove_label_ids)
    return Request("POST", f"{USER}/messages/{message_id}/modify", body=body)


def trash_message(message_id: str) -> Request:
    return Request("POST", f"{USER}/messages/{message_id}/trash")


def untrash_message(message_id: str) -> Request:
    return Request("POST", f"{USER}/messages/{message_id}/untrash")


def delete_message(message_id: str) -> Request:
    return Request("DELETE", f"{USER}/messages/{message_id}")


# Labels

def list_labels(
    max_results: int | None = None, page_token: str | None = None,
) -> Request:
    return Request("GET", f"{USER}/labels").with_query(
        maxResults=max_results, pageToken=page_token,
    )


def get_label(label_id: str) -> Request:
    return Request("GET", f"{USER}/labels/{label_id}")


def create_label(body: dict[str, Any]) -> Request:
    return Request("POST", f"{USER}/labels", body=body)


def update_label(label_id: str, body: dict[str, Any]) -> Request:
    return Request("PATCH", f"{USER}/labels/{label_id}", body=body)


def delete_label(label_id: str) -> Request:
    return Request("DELETE", f"{USER}/labels/{label_id}")


# OAuth2 tokens

def exchange_code(
    code: str, client_id: str, client_secret: str, redirect_uri: str,
) -> Request:
    return Request(
        "POST",
        endpoint=TOKEN,
        form={
            "grant_type": "authorization_code",
            "code": code,
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": redirect_uri,
        },
    )


def refresh_token(
    refresh_token: str, client_id: str, client_secret: str,
) -> Request:
    return Request(
        "POST",
        endpoint=TOKEN,
        form={
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": client_id,
            "client_secret": client_secret,
        },
    )
