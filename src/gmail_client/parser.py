"""Parse Gmail API message payloads into headers and body text."""

from __future__ import annotations

import base64
import re

from bs4 import BeautifulSoup


def extract_headers(payload: dict) -> dict[str, str]:
    """Header map keyed by lower-cased name. Later duplicates win."""
    return {
        h["name"].lower(): h["value"]
        for h in payload.get("headers", [])
        if "name" in h
    }


def extract_body(payload: dict) -> str | None:
    """Decoded message text, preferring text/plain over stripped HTML."""
    text = _find_part(payload, "text/plain")
    if text:
        return text

    html = _find_part(payload, "text/html")
    if html:
        return strip_html(html)

    # Single-part messages without a mimeType still carry body.data
    if not payload.get("parts"):
        return decode_body_data(payload) or None
    return None


def _find_part(payload: dict, mime_type: str) -> str:
    if payload.get("mimeType") == mime_type:
        return decode_body_data(payload)
    for part in payload.get("parts", []):
        text = _find_part(part, mime_type)
        if text:
            return text
    return ""


def decode_body_data(payload: dict) -> str:
    data = payload.get("body", {}).get("data", "")
    if not data:
        return ""
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
    except ValueError:
        return ""


def strip_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "head"]):
        tag.decompose()
    text = soup.get_text(separator=" ")
    return re.sub(r"\s+", " ", text).strip()


def has_attachments(payload: dict) -> bool:
    for part in payload.get("parts", []):
        if part.get("filename"):
            return True
        if part.get("parts") and has_attachments(part):
            return True
    return False


def parse_int(value) -> int | None:
    """Gmail sends int64 fields such as internalDate as strings."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
