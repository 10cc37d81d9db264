"""Parse ``Retry-After`` header values into a wait in seconds."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

DEFAULT_RETRY_AFTER_SECONDS = 60

_DECIMAL = re.compile(r"^\d+\.\d*$|^\.\d+$")


def parse_retry_after(
    value: str | list[str] | None,
    now: datetime | None = None,
) -> int:
    """Convert a ``Retry-After`` value to whole seconds.

    Accepts delta-seconds (``"120"``, decimals truncated) or an HTTP date.
    Dates in the past give 0. Missing or unparseable values fall back to
    ``DEFAULT_RETRY_AFTER_SECONDS``.
    """
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS

    value = str(value).strip()
    if not value:
        return DEFAULT_RETRY_AFTER_SECONDS

    if value.isdigit():
        return int(value)
    if _DECIMAL.match(value):
        return int(float(value))

    try:
        retry_at = date_parser.parse(value)
    except (ValueError, OverflowError):
        return DEFAULT_RETRY_AFTER_SECONDS

    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    return max(0, math.floor((retry_at - now).total_seconds()))
