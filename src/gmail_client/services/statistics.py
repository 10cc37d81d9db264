"""Cheap account-level statistics and health probes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from gmail_client import query as gmail_query
from gmail_client import resources
from gmail_client.config import PerformanceConfig
from gmail_client.connector import Request
from gmail_client.exceptions import error_for_response
from gmail_client.services.base import Service

logger = logging.getLogger(__name__)

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"
AUTHENTICATION_FAILED = "authentication_failed"
RATE_LIMITED = "rate_limited"
ERROR = "error"

STATISTICS_UNAVAILABLE = "STATISTICS_UNAVAILABLE"
ACCOUNT_SUMMARY_ERROR = "ACCOUNT_SUMMARY_ERROR"

ESTIMATE_SAMPLE_SIZE = 10


@dataclass
class StatisticsOptions:
    """Options for ``get_account_statistics``.

    ``None`` fields take their value from ``PerformanceConfig``:
    ``unread_limit`` from ``count_estimation_threshold``,
    ``estimate_large_counts`` from ``enable_smart_counting`` and
    ``timeout`` from ``api_timeout``.
    """

    unread_limit: int | None = None
    today_limit: int = 15
    include_labels: bool = True
    estimate_large_counts: bool | None = None
    background_mode: bool = False
    timeout: float | None = None

    def resolve(self, performance: PerformanceConfig) -> StatisticsOptions:
        return replace(
            self,
            unread_limit=(
                performance.count_estimation_threshold
                if self.unread_limit is None else self.unread_limit
            ),
            estimate_large_counts=(
                performance.enable_smart_counting
                if self.estimate_large_counts is None else self.estimate_large_counts
            ),
            timeout=performance.api_timeout if self.timeout is None else self.timeout,
        )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StatisticsService(Service):
    """Aggregates a handful of small list calls into one report."""

    def get_account_statistics(
        self, options: StatisticsOptions | None = None, **overrides: Any,
    ) -> dict[str, Any]:
        """Unread/today/label counts plus the API's own size estimate.

        In background mode the today count is skipped and failures are
        reported through ``partial_failure``/``error`` instead of raised.
        """
        opts = replace(options or StatisticsOptions(), **overrides)
        opts = opts.resolve(self.config.performance)

        stats: dict[str, Any] = {
            "unread_count": None,
            "today_count": None,
            "labels_count": None,
            "estimated_total": None,
            "api_calls_made": 0,
            "last_updated": _now(),
            "partial_failure": False,
            "error": None,
        }

        try:
            unread = len(self._list(
                gmail_query.build_query(unread=True), opts.unread_limit, opts.timeout,
            ).get("messages") or [])
            stats["api_calls_made"] += 1
            if opts.estimate_large_counts and unread >= opts.unread_limit:
                # Capped sample; report a rough upper figure rather than the cap
                unread *= 2
            stats["unread_count"] = unread

            if not opts.background_mode:
                today = gmail_query.build_query(
                    after=datetime.now().date(),
                )
                stats["today_count"] = len(self._list(
                    today, opts.today_limit, opts.timeout,
                ).get("messages") or [])
                stats["api_calls_made"] += 1

            if opts.include_labels:
                response = self._send(
                    resources.list_labels().with_timeout(opts.timeout), "Label",
                )
                stats["labels_count"] = len(response.json().get("labels") or [])
                stats["api_calls_made"] += 1

            if opts.estimate_large_counts:
                data = self._list(None, ESTIMATE_SAMPLE_SIZE, opts.timeout)
                stats["api_calls_made"] += 1
                if data.get("resultSizeEstimate") is not None:
                    stats["estimated_total"] = int(data["resultSizeEstimate"])

        except Exception as e:
            stats["partial_failure"] = True
            stats["error"] = str(e)
            logger.warning(f"Account statistics incomplete: {e}")
            if not opts.background_mode:
                raise

        return stats

    def safe_get_account_statistics(self, **options: Any) -> dict[str, Any]:
        """Background-mode statistics that never raise."""
        options["background_mode"] = True
        try:
            return self.get_account_statistics(**options)
        except Exception as e:
            logger.warning(f"Account statistics unavailable: {e}")
            return {
                "unread_count": "?",
                "today_count": "?",
                "labels_count": "?",
                "estimated_total": "?",
                "api_calls_made": 1,
                "last_updated": _now(),
                "partial_failure": True,
                "error": str(e),
            }

    def _list(self, q: str | None, max_results: int, timeout: float | None) -> dict:
        request: Request = resources.list_messages(
            {"q": q} if q else None, max_results,
        ).with_timeout(timeout)
        return self._send(request, "Message").json()

    # Health

    def get_account_health(self) -> dict[str, Any]:
        """Probe connectivity with one label listing."""
        token = self.connector.token
        health: dict[str, Any] = {
            "connected": False,
            "status": ERROR,
            "token_expires_in": token.expires_in() if token else None,
            "api_quota_remaining": None,
            "last_successful_call": None,
            "errors": [],
        }

        try:
            response = self.connector.send(resources.list_labels())
        except Exception as e:
            health["errors"].append(str(e))
            logger.warning(f"Gmail health check failed: {e}")
            return health

        remaining = response.header("X-RateLimit-Remaining")
        if isinstance(remaining, list):
            remaining = remaining[0]
        if remaining is not None and str(remaining).isdigit():
            health["api_quota_remaining"] = int(remaining)

        if response.successful:
            health["connected"] = True
            health["status"] = HEALTHY
            health["last_successful_call"] = _now()
            return health

        if response.status == 401:
            health["status"] = AUTHENTICATION_FAILED
        elif response.status == 429:
            health["status"] = RATE_LIMITED
            health["api_quota_remaining"] = 0
        else:
            health["status"] = UNHEALTHY
        health["errors"].append(str(error_for_response(response)))
        return health

    def is_connected(self) -> bool:
        health = self.get_account_health()
        return health["connected"] and health["status"] == HEALTHY

    def get_account_summary(self) -> dict[str, Any]:
        summary: dict[str, Any] = {
            "connected": False,
            "labels_count": 0,
            "has_unread": False,
            "errors": [],
        }
        try:
            summary["connected"] = self.is_connected()
            if summary["connected"]:
                stats = self.safe_get_account_statistics(
                    unread_limit=1, include_labels=True,
                )
                if isinstance(stats.get("labels_count"), int):
                    summary["labels_count"] = stats["labels_count"]
                unread = stats.get("unread_count")
                summary["has_unread"] = isinstance(unread, int) and unread > 0
                if stats.get("partial_failure"):
                    summary["errors"].append(STATISTICS_UNAVAILABLE)
        except Exception as e:
            logger.warning(f"Account summary failed: {e}")
            summary["errors"].append(ACCOUNT_SUMMARY_ERROR)
        return summary
