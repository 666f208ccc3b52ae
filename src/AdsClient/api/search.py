"""Search request builder for the ``search/query`` endpoint.

``SearchQuery`` is an immutable value: every fluent call returns a new query,
so one query can be shared by several iterators without aliasing.

Example:
    >>> client = AdsApiClient.from_env()
    >>> query = client.search("supernova").sort("citation_count").field("bibcode")
    >>> for doc in query.iter(limit=5):
    ...     print(doc.bibcode)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from AdsClient.api.parser import parse_search_envelope
from AdsClient.core.models import SearchPage
from AdsClient.core.sort import Sort, SortLike, render_sort_list
from AdsClient.utils.log import log

if TYPE_CHECKING:
    from AdsClient.api.aio import AsyncSearchIterator
    from AdsClient.api.pagination import SearchIterator

SEARCH_PATH = "search/query"

# The maximum number of rows the API returns per request.
MAX_ROWS = 2000

DEFAULT_FIELDS: tuple[str, ...] = ("author", "first_author", "bibcode", "id", "year", "title")


class SearchTransport(Protocol):
    """Minimal client interface needed to dispatch a search."""

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Issue a GET request and return the decoded JSON body."""
        ...


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """A search request with field projection, filtering and sorting.

    Attributes:
        client: Client used to dispatch the request.
        query: Free-text query, passed to the server verbatim.
        page_rows: Requested page size (``rows``); ``None`` leaves it unset.
        offset: Requested start offset (``start``); ``None`` leaves it unset.
        field_list: Fields to return (``fl``), in insertion order.
        filter_query: Single filter query (``fq``).
        sort_list: Sort keys, in insertion order.
    """

    client: SearchTransport = dataclasses.field(repr=False, compare=False)
    query: str
    page_rows: int | None = None
    offset: int | None = None
    field_list: tuple[str, ...] = ()
    filter_query: str | None = None
    sort_list: tuple[Sort, ...] = ()

    def start(self, start: int) -> SearchQuery:
        """Set the absolute offset of the first returned result.

        Raises:
            ValueError: If ``start`` is negative.
        """
        if start < 0:
            raise ValueError("start must be >= 0")
        return dataclasses.replace(self, offset=start)

    def rows(self, rows: int) -> SearchQuery:
        """Set the number of results per page.

        Values above ``MAX_ROWS`` are clamped when the request is serialized.
        To bound the total number of results, use ``iter(limit=...)`` instead.

        Raises:
            ValueError: If ``rows`` is smaller than 1.
        """
        if rows < 1:
            raise ValueError("rows must be >= 1")
        return dataclasses.replace(self, page_rows=rows)

    def field(self, name: str) -> SearchQuery:
        """Append a field to the list of returned fields.

        ``name`` may itself be a comma-separated list such as ``"id,author"``;
        it is sent as given.
        """
        return dataclasses.replace(self, field_list=(*self.field_list, name))

    def filter(self, expr: str) -> SearchQuery:
        """Set the filter query (``fq``).

        Only one filter is supported; a later call replaces the earlier one.
        """
        return dataclasses.replace(self, filter_query=expr)

    def sort(self, sort: SortLike) -> SearchQuery:
        """Append a sort key.

        A bare field name sorts in descending order; pass
        ``Sort.ascending(field)`` for ascending order. Without any sort key
        the server orders by relevancy.
        """
        return dataclasses.replace(self, sort_list=(*self.sort_list, Sort.coerce(sort)))

    def to_params(self) -> dict[str, Any]:
        """Serialize to query parameters.

        Returns:
            Parameters in the order ``q, rows, start, fl, fq, sort``. Unset
            ``rows``/``start``/``fq`` and an empty sort list are omitted; an
            empty field list is replaced by ``DEFAULT_FIELDS``.
        """
        params: dict[str, Any] = {"q": self.query}
        if self.page_rows is not None:
            params["rows"] = min(self.page_rows, MAX_ROWS)
        if self.offset is not None:
            params["start"] = self.offset
        params["fl"] = ",".join(self.field_list or DEFAULT_FIELDS)
        if self.filter_query is not None:
            params["fq"] = self.filter_query
        if self.sort_list:
            params["sort"] = render_sort_list(self.sort_list)
        return params

    def send(self) -> SearchPage:
        """Submit the query and return one page of results.

        Raises:
            RemoteRejectedError: If the server reports an error for the query.
            DecodeError: If the response envelope is malformed.
            TransportError: On network or HTTP failures.
        """
        params = self.to_params()
        payload = self.client.get_json(SEARCH_PATH, params)
        page = parse_search_envelope(payload)
        log.debug(
            "Search page: q=%r start=%s rows=%s num_found=%d docs=%d",
            self.query,
            page.start,
            params.get("rows"),
            page.num_found,
            len(page.docs),
        )
        return page

    def iter(self, limit: int | None = None) -> SearchIterator:
        """Iterate over all results, fetching pages on demand.

        Args:
            limit: Optional cap on the total number of documents. Prefer this
                over slicing the iterator: it also shrinks the page requests.
        """
        from AdsClient.api.pagination import SearchIterator

        return SearchIterator(self, limit=limit)

    def stream(self, limit: int | None = None) -> AsyncSearchIterator:
        """Asynchronous counterpart of ``iter``."""
        from AdsClient.api.aio import AsyncSearchIterator

        return AsyncSearchIterator(self, limit=limit)
