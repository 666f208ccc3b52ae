"""Async pagination over search results.

Same rules as ``SearchIterator`` (see ``AdsClient.api.pagination``). The
blocking ``SearchQuery.send`` runs in a worker thread via
``asyncio.to_thread()``, so each page fetch is a single suspension point.
Fetches for one iterator are serialized by a lock, which keeps offsets
strictly increasing even if several tasks consume the same iterator.

Example:
    >>> import asyncio
    >>> async def main():
    ...     async for doc in client.search("supernova").stream(limit=10):
    ...         print(doc.bibcode)
    >>> asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import dataclasses
from typing import TYPE_CHECKING, Any, AsyncIterator

from AdsClient.api.pagination import IteratorState, PaginationState
from AdsClient.core.models import SearchPage

if TYPE_CHECKING:
    from AdsClient.api.search import SearchQuery


class AsyncSearchIterator:
    """Async iterator over every document matched by a query.

    Consume it either document by document (``async for``) or page by page
    (``pages()``), not both.
    """

    def __init__(self, query: SearchQuery, *, limit: int | None = None) -> None:
        self._pagination = PaginationState(query, limit=limit)
        self._lock = asyncio.Lock()

    @property
    def state(self) -> IteratorState:
        return self._pagination.state

    @property
    def num_found(self) -> int:
        return self._pagination.num_found

    def __aiter__(self) -> AsyncSearchIterator:
        return self

    async def __anext__(self) -> Any:
        async with self._lock:
            pagination = self._pagination
            doc = pagination.pop()
            if doc is not None:
                return doc
            if pagination.is_done():
                raise StopAsyncIteration

            await self._fetch()
            doc = pagination.pop()
            if doc is None:
                raise StopAsyncIteration
            return doc

    async def pages(self) -> AsyncIterator[SearchPage]:
        """Yield whole pages, trimmed to the limit.

        Termination follows the same rules as document iteration.
        """
        while True:
            async with self._lock:
                if self._pagination.is_done():
                    return
                page = await self._fetch()
                docs = self._pagination.drain()
            if not docs:
                return
            yield dataclasses.replace(page, docs=docs)

    async def _fetch(self) -> SearchPage:
        pagination = self._pagination
        request = pagination.page_request()
        try:
            page = await asyncio.to_thread(request.send)
        except Exception:
            pagination.fail()
            raise
        pagination.absorb(page)
        return page
