"""Transparent pagination over search results.

The pagination rules live in ``PaginationState`` so the blocking iterator and
the asyncio iterator share one implementation. Each advance either returns a
buffered document or requests exactly one more page:

1. A buffered document is returned and the cursor moves past it.
2. With the buffer empty, the sequence ends once the cursor has reached the
   latest ``numFound`` or the caller's limit. ``numFound`` is re-read from
   every page because the index can change between requests. Before the
   first page the total is unknown, so the first page is always fetched
   (unless the limit is zero).
3. Otherwise the next page is requested at the cursor with
   ``rows = min(MAX_ROWS, remaining limit, query rows)``. An empty page ends
   the sequence.

A failed fetch is raised to the caller once and is never retried or
skipped. The iterator does not mark itself dead afterwards; callers are
expected to stop consuming after an error.
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

from AdsClient.api.search import MAX_ROWS
from AdsClient.core.models import SearchPage
from AdsClient.utils.log import log

if TYPE_CHECKING:
    from AdsClient.api.search import SearchQuery


class IteratorState(Enum):
    """Observable state of a pagination session."""

    FRESH = "fresh"
    FETCHING = "fetching"
    BUFFERED = "buffered"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PaginationState:
    """Cursor, running total and document buffer for one pagination session.

    Attributes:
        query: Query snapshot; page requests are derived copies of it.
        limit: Optional cap on the number of documents, counted from the
            query's own start offset.
        origin: Offset of the first requested document.
        cursor: Absolute offset of the next document.
        num_found: Total reported by the most recent page (0 before the first).
        pages_fetched: Number of successful page requests.
        state: Current ``IteratorState``.
    """

    def __init__(self, query: SearchQuery, limit: int | None = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError("limit must be >= 0")
        self.query = query
        self.limit = limit
        self.origin = query.offset or 0
        self.cursor = self.origin
        self.num_found = 0
        self.pages_fetched = 0
        self.state = IteratorState.FRESH
        self._buffer: deque[Any] = deque()

    @property
    def consumed(self) -> int:
        """Number of documents handed out so far."""
        return self.cursor - self.origin

    def limit_reached(self) -> bool:
        return self.limit is not None and self.consumed >= self.limit

    def pop(self) -> Any | None:
        """Return the next buffered document, or None when the buffer is empty.

        Documents beyond the limit are dropped locally.
        """
        if not self._buffer:
            return None
        if self.limit_reached():
            self._buffer.clear()
            self._finish("limit %d reached" % self.limit)
            return None
        self.cursor += 1
        return self._buffer.popleft()

    def drain(self) -> tuple[Any, ...]:
        """Pop every buffered document that is still within the limit."""
        docs = []
        while True:
            doc = self.pop()
            if doc is None:
                return tuple(docs)
            docs.append(doc)

    def is_done(self) -> bool:
        """Return True when no further page may be requested."""
        if self.state is IteratorState.EXHAUSTED:
            return True
        if self.limit_reached():
            self._finish("limit %d reached" % self.limit)
            return True
        if self.pages_fetched and self.cursor >= self.num_found:
            self._finish("cursor %d reached num_found %d" % (self.cursor, self.num_found))
            return True
        return False

    def page_size(self) -> int:
        size = min(MAX_ROWS, self.query.page_rows or MAX_ROWS)
        if self.limit is not None:
            size = min(size, self.limit - self.consumed)
        return size

    def page_request(self) -> SearchQuery:
        """Derive the request for the page starting at the cursor."""
        self.state = IteratorState.FETCHING
        rows = self.page_size()
        log.debug("Fetching page: start=%d rows=%d num_found=%d", self.cursor, rows, self.num_found)
        return self.query.start(self.cursor).rows(rows)

    def absorb(self, page: SearchPage) -> None:
        """Record a successfully fetched page."""
        self.pages_fetched += 1
        self.num_found = page.num_found
        self.cursor = page.start
        self._buffer = deque(page.docs)
        if self._buffer:
            self.state = IteratorState.BUFFERED
        else:
            self._finish("empty page at start=%d" % page.start)

    def fail(self) -> None:
        self.state = IteratorState.FAILED

    def _finish(self, reason: str) -> None:
        if self.state is not IteratorState.EXHAUSTED:
            log.debug("Pagination finished: %s", reason)
        self.state = IteratorState.EXHAUSTED


class SearchIterator(Iterator[Any]):
    """Blocking iterator over every document matched by a query.

    Example:
        >>> for doc in client.search("supernova").iter(limit=5):
        ...     print(doc.title)
    """

    def __init__(self, query: SearchQuery, *, limit: int | None = None) -> None:
        self._pagination = PaginationState(query, limit=limit)

    def limit(self, limit: int) -> SearchIterator:
        """Return a fresh iterator over the same query, capped at ``limit``.

        Setting a limit also shrinks the page requests, so it should be
        preferred over ``itertools.islice``.
        """
        return SearchIterator(self._pagination.query, limit=limit)

    @property
    def state(self) -> IteratorState:
        return self._pagination.state

    @property
    def num_found(self) -> int:
        return self._pagination.num_found

    @property
    def cursor(self) -> int:
        return self._pagination.cursor

    def __iter__(self) -> SearchIterator:
        return self

    def __next__(self) -> Any:
        pagination = self._pagination
        doc = pagination.pop()
        if doc is not None:
            return doc
        if pagination.is_done():
            raise StopIteration

        request = pagination.page_request()
        try:
            page = request.send()
        except Exception:
            pagination.fail()
            raise
        pagination.absorb(page)

        doc = pagination.pop()
        if doc is None:
            raise StopIteration
        return doc
