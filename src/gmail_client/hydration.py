"""Fetch full message details for a page of ``{id, threadId}`` refs.

A failed detail fetch degrades that one item to ``Email.minimal`` instead
of failing the page. Results keep the order of the input refs.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from gmail_client.config import PerformanceConfig
from gmail_client.models import Email

logger = logging.getLogger(__name__)


def fetch_or_minimal(ref: dict, fetch: Callable[[str], Email]) -> Email:
    """Fetch one message, falling back to its minimal projection."""
    try:
        return fetch(ref["id"])
    except Exception as e:
        logger.warning(
            f"Failed to fetch details for message {ref.get('id')}, "
            f"using minimal data: {e}"
        )
        return Email.from_ref(ref)


def hydrate(
    refs: list[dict],
    fetch: Callable[[str], Email],
    full_details: bool = True,
    config: PerformanceConfig | None = None,
) -> list[Email]:
    """Turn message refs into ``Email`` objects.

    Without ``full_details`` no request is made at all. With batching
    enabled, detail fetches run ``max_concurrent_requests`` at a time with
    ``batch_delay`` between groups; otherwise they run one by one.
    """
    if not full_details:
        return [Email.from_ref(ref) for ref in refs]
    if not refs:
        return []

    config = config or PerformanceConfig()
    if not config.enable_batching:
        return [fetch_or_minimal(ref, fetch) for ref in refs]

    group_size = max(1, config.max_concurrent_requests)
    results: list[Email | None] = [None] * len(refs)

    with ThreadPoolExecutor(max_workers=group_size) as executor:
        for start in range(0, len(refs), group_size):
            if start and config.batch_delay:
                time.sleep(config.batch_delay)

            group = refs[start:start + group_size]
            futures = [
                executor.submit(fetch_or_minimal, ref, fetch) for ref in group
            ]
            for offset, future in enumerate(futures):
                results[start + offset] = future.result()

    logger.debug(f"Hydrated {len(refs)} messages in groups of {group_size}")
    return results
