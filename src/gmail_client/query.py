"""Gmail search query builder.

Keyword terms are AND-ed. A list value ORs its items, a tuple ANDs them.
Prefix a keyword with ``exclude_`` to negate it::

    build_query(sender=["a@x.com", "b@x.com"], unread=True, exclude_label="Spam")
    # '({from:a@x.com from:b@x.com} is:unread -label:Spam)'
"""

from __future__ import annotations

from datetime import date, datetime


def format_date(value: date | datetime | str) -> str:
    """Gmail's ``YYYY/MM/DD`` date format."""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y/%m/%d")
    return value


# keyword -> operator prefix
_OPERATORS = {
    "sender": "from:",
    "recipient": "to:",
    "cc": "cc:",
    "bcc": "bcc:",
    "subject": "subject:",
    "label": "label:",
    "in_folder": "in:",
    "filename": "filename:",
    "category": "category:",
    "larger": "larger:",
    "smaller": "smaller:",
    "has": "has:",
    "text": "",
}

# keyword -> fixed term, used when the value is True
_FLAGS = {
    "unread": "is:unread",
    "read": "is:read",
    "starred": "is:starred",
    "important": "is:important",
    "attachment": "has:attachment",
}

_DATES = {"after": "after:", "before": "before:"}


def build_query(**terms) -> str:
    parts = []
    for key, value in terms.items():
        if value is None or value is False:
            continue

        exclude = key.startswith("exclude_")
        if exclude:
            key = key[len("exclude_"):]

        term = _term(key, value)
        parts.append(f"-{term}" if exclude else term)

    return _and(parts) if parts else ""


def _term(key: str, value) -> str:
    if key in _FLAGS:
        return _FLAGS[key]

    if key in _DATES:
        return f"{_DATES[key]}{format_date(value)}"

    if key not in _OPERATORS:
        raise ValueError(f"Unknown query term: {key!r}")

    prefix = _OPERATORS[key]
    if isinstance(value, tuple):
        return _and([f"{prefix}{_quote(v)}" for v in value])
    if isinstance(value, list):
        return _or([f"{prefix}{_quote(v)}" for v in value])
    return f"{prefix}{_quote(value)}"


def _quote(value) -> str:
    value = str(value)
    if " " in value and not value.startswith('"'):
        return f'"{value}"'
    return value


def _and(terms: list[str]) -> str:
    if len(terms) == 1:
        return terms[0]
    return f'({" ".join(terms)})'


def _or(terms: list[str]) -> str:
    if len(terms) == 1:
        return terms[0]
    return "{" + " ".join(terms) + "}"


def date_range(start: date | datetime | str, end: date | datetime | str) -> str:
    """``after:START before:END`` without grouping parentheses."""
    return f"after:{format_date(start)} before:{format_date(end)}"
