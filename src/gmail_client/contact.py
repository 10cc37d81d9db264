"""Email address / display name parsing for From, To, Cc and Bcc headers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_SPECIALS = set('()<>@,;:\\".[]')

_QUOTED = re.compile(r'^"((?:[^"\\]|\\.)*)"\s*<([^>]*)>$')
_NAMED = re.compile(r'^(.*?)\s*<([^>]*)>$')


@dataclass(frozen=True)
class Contact:
    """A single mailbox: address plus optional display name."""

    email: str
    name: str | None = None
    domain: str = field(init=False)

    def __post_init__(self):
        domain = self.email.rsplit("@", 1)[1] if "@" in self.email else ""
        object.__setattr__(self, "domain", domain.lower())

    @classmethod
    def parse(cls, text: str) -> Contact:
        """Parse ``"Name" <addr>``, ``Name <addr>``, ``<addr>`` or ``addr``."""
        text = text.strip()

        match = _QUOTED.match(text)
        if match:
            name = re.sub(r'\\(.)', r'\1', match.group(1))
            return cls(match.group(2).strip(), name or None)

        match = _NAMED.match(text)
        if match:
            name = match.group(1).strip()
            return cls(match.group(2).strip(), name or None)

        return cls(text)

    @classmethod
    def parse_many(cls, text: str | None) -> list[Contact]:
        """Split a header on commas that are not inside quotes or brackets."""
        if not text:
            return []

        entries = []
        current = []
        in_quotes = False
        in_brackets = False
        escaped = False
        for char in text:
            if escaped:
                escaped = False
            elif char == "\\" and in_quotes:
                escaped = True
            elif char == '"':
                in_quotes = not in_quotes
            elif char == "<" and not in_quotes:
                in_brackets = True
            elif char == ">" and not in_quotes:
                in_brackets = False
            elif char == "," and not in_quotes and not in_brackets:
                entries.append("".join(current))
                current = []
                continue
            current.append(char)
        entries.append("".join(current))

        return [cls.parse(entry) for entry in entries if entry.strip()]

    @property
    def display_name(self) -> str:
        return self.name or self.email

    @property
    def local_part(self) -> str:
        return self.email.rsplit("@", 1)[0]

    def is_from_domain(self, domain: str) -> bool:
        return self.domain == domain.lower().lstrip("@")

    def format(self) -> str:
        if not self.name:
            return self.email
        name = self.name
        if any(char in _SPECIALS for char in name):
            escaped = name.replace("\\", "\\\\").replace('"', '\\"')
            name = f'"{escaped}"'
        return f"{name} <{self.email}>"

    def __str__(self) -> str:
        return self.format()


_ADDRESS = re.compile(r"^[^@\s<>(),;:\"\[\]]+@[^@\s<>(),;:\"\[\]]+\.[A-Za-z]{2,}$")


def is_valid_email(address: str | None) -> bool:
    """Syntactic check of a bare address (no display name)."""
    return bool(address) and _ADDRESS.match(address.strip()) is not None
