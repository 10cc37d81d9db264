"""Cursor-based pagination over Gmail list endpoints.

``Paginator`` fetches explicitly, one page per call, and accumulates what
it has seen. ``LazySequence`` is an iterable that walks the cursor only as
far as the consumer pulls, starting over on every ``iter()``.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Iterable, Iterator

from gmail_client.connector import GmailConnector, Request
from gmail_client.exceptions import raise_for_status

logger = logging.getLogger(__name__)

# (max_results, page_token) -> Request
RequestBuilder = Callable[[int, str | None], Request]


class Paginator:
    """Page-at-a-time fetcher for a list endpoint.

    Args:
        connector: Sends the page requests.
        build_request: Called with ``(page_size, page_token)`` for each page.
        key: Response key holding the item array (``"messages"``, ``"labels"``).
        page_size: ``maxResults`` sent with every page.
        resource_type: Used for ``NotFoundError`` messages.
    """

    def __init__(
        self,
        connector: GmailConnector,
        build_request: RequestBuilder,
        key: str,
        page_size: int = 25,
        resource_type: str | None = None,
    ):
        self.connector = connector
        self.build_request = build_request
        self.key = key
        self.page_size = page_size
        self.resource_type = resource_type
        self._items: list[Any] = []
        self._page_token: str | None = None
        self._has_more = True

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    def has_more_pages(self) -> bool:
        return self._has_more

    def get_page_token(self) -> str | None:
        return self._page_token

    def get_next_page(self) -> list[Any]:
        """Fetch the next page and return just its items.

        Returns an empty list, without a request, once the cursor is spent.
        """
        if not self._has_more:
            return []

        request = self.build_request(self.page_size, self._page_token)
        response = raise_for_status(
            self.connector.send(request), self.resource_type,
        )
        data = response.json()
        if not isinstance(data, dict):
            data = {}

        page = data.get(self.key)
        fetched = 0
        if isinstance(page, list):
            self._items.extend(page)
            fetched = len(page)
        elif page is not None:
            logger.warning(
                f"Ignoring malformed '{self.key}' page of type {type(page).__name__}"
            )

        self._page_token = data.get("nextPageToken") or None
        self._has_more = self._page_token is not None
        logger.debug(
            f"Fetched {fetched} {self.key}, more pages: {self._has_more}"
        )

        if not fetched:
            return []
        return self._items[-min(fetched, self.page_size):]

    def get_all_pages(self, max_items: int | None = None) -> list[Any]:
        """Drain the cursor (or stop at ``max_items``) and return everything."""
        while self._has_more:
            if max_items is not None and len(self._items) >= max_items:
                break
            self.get_next_page()

        if max_items is not None:
            return self._items[:max_items]
        return list(self._items)

    def transform(self, parse: Callable[[dict[str, list]], Any]) -> Any:
        """Hand the accumulated items, re-wrapped under ``key``, to ``parse``."""
        return parse({self.key: list(self._items)})


def iter_items(
    connector: GmailConnector,
    build_request: RequestBuilder,
    key: str,
    page_size: int,
    resource_type: str | None = None,
) -> Iterator[Any]:
    """Yield raw items across pages, fetching a page only when needed."""
    page_token = None
    while True:
        response = raise_for_status(
            connector.send(build_request(page_size, page_token)), resource_type,
        )
        data = response.json()
        if not isinstance(data, dict):
            return

        page = data.get(key)
        if isinstance(page, list):
            yield from page

        page_token = data.get("nextPageToken")
        if not page_token:
            return


class LazySequence:
    """Restartable lazy iterable.

    ``factory`` is called on every ``iter()`` and must return a fresh
    iterator, so two loops over the same sequence never share a cursor.
    """

    def __init__(self, factory: Callable[[], Iterable[Any]]):
        self._factory = factory

    @classmethod
    def empty(cls) -> LazySequence:
        return cls(tuple)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._factory())

    def take(self, count: int) -> list[Any]:
        return list(itertools.islice(self, count))

    def first(self) -> Any:
        return next(iter(self), None)

    def __repr__(self) -> str:
        return f"<LazySequence factory={self._factory!r}>"
