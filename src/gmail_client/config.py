"""Configuration structs for gmail-client.

All values have defaults so ``GmailConfig()`` is usable as-is; only the
OAuth settings (``client_id`` and friends) need to be supplied for the
authorization flow. ``GmailConfig.from_env()`` reads the ``GMAIL_*``
environment variables.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass, field
from typing import Any

SCOPE_PREFIX = "https://www.googleapis.com/auth/"

DEFAULT_SCOPES = [
    f"{SCOPE_PREFIX}gmail.readonly",
    f"{SCOPE_PREFIX}gmail.send",
    f"{SCOPE_PREFIX}gmail.compose",
    f"{SCOPE_PREFIX}gmail.modify",
    f"{SCOPE_PREFIX}gmail.labels",
]


@dataclass
class PerformanceConfig:
    """Tuning knobs for counting, batching and paging."""

    enable_smart_counting: bool = True
    count_estimation_threshold: int = 50
    default_cache_ttl: int = 300
    max_concurrent_requests: int = 3
    enable_circuit_breaker: bool = True
    api_timeout: float = 30
    enable_batching: bool = True
    batch_size: int = 100
    batch_delay_microseconds: int = 100_000
    default_page_size: int = 25
    max_page_size: int = 100

    @property
    def batch_delay(self) -> float:
        """Pause between hydration groups, in seconds."""
        return self.batch_delay_microseconds / 1_000_000

    def page_size(self, requested: int | None = None) -> int:
        if requested is None:
            requested = self.default_page_size
        return max(1, min(int(requested), self.max_page_size))


@dataclass
class RateLimitConfig:
    """Backoff policy exposed to callers; services never retry on their own."""

    requests_per_second: int = 10
    requests_per_minute: int = 250
    requests_per_day: int = 1_000_000
    initial_backoff: float = 1
    max_backoff: float = 64
    backoff_multiplier: float = 2.0
    max_retries: int = 3
    jitter: bool = True
    exempt_operations: list[str] = field(default_factory=lambda: ["auth.refresh"])

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait before retry number ``attempt`` (0-based)."""
        delay = min(
            self.initial_backoff * (self.backoff_multiplier ** attempt),
            self.max_backoff,
        )
        if self.jitter:
            delay = random.uniform(0, delay)
        return delay

    def is_exempt(self, operation: str) -> bool:
        return operation in self.exempt_operations


@dataclass
class LoggingConfig:
    max_log_size: int = 1024
    sensitive_fields: list[str] = field(
        default_factory=lambda: [
            "access_token", "refresh_token", "client_secret", "code",
        ]
    )

    def redact(self, context: dict[str, Any]) -> dict[str, Any]:
        """Copy of ``context`` with sensitive values masked."""
        return {
            key: "[REDACTED]" if key in self.sensitive_fields else value
            for key, value in context.items()
        }

    def truncate(self, text: str) -> str:
        if len(text) <= self.max_log_size:
            return text
        return text[: self.max_log_size] + "..."


@dataclass
class GmailConfig:
    """Top-level client configuration."""

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str | None = None
    scopes: list[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    from_email: str | None = None
    from_name: str | None = None
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> GmailConfig:
        env = os.environ if environ is None else environ

        scopes = list(DEFAULT_SCOPES)
        if env.get("GMAIL_SCOPES"):
            scopes = [
                s if s.startswith("https://") else f"{SCOPE_PREFIX}{s}"
                for s in env["GMAIL_SCOPES"].replace(",", " ").split()
            ]

        performance = PerformanceConfig()
        if env.get("GMAIL_API_TIMEOUT"):
            performance.api_timeout = float(env["GMAIL_API_TIMEOUT"])
        if env.get("GMAIL_MAX_CONCURRENT_REQUESTS"):
            performance.max_concurrent_requests = int(
                env["GMAIL_MAX_CONCURRENT_REQUESTS"]
            )
        if "GMAIL_ENABLE_BATCHING" in env:
            performance.enable_batching = _env_bool(env["GMAIL_ENABLE_BATCHING"])
        if "GMAIL_ENABLE_SMART_COUNTING" in env:
            performance.enable_smart_counting = _env_bool(
                env["GMAIL_ENABLE_SMART_COUNTING"]
            )

        return cls(
            client_id=env.get("GMAIL_CLIENT_ID") or None,
            client_secret=env.get("GMAIL_CLIENT_SECRET") or None,
            redirect_uri=env.get("GMAIL_REDIRECT_URI") or None,
            scopes=scopes,
            from_email=env.get("GMAIL_FROM_EMAIL") or None,
            from_name=env.get("GMAIL_FROM_NAME") or None,
            performance=performance,
        )


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
