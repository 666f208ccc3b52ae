"""HTTP-facing layer: transport, request builders, pagination and parsing."""

from __future__ import annotations

from AdsClient.api.aio import AsyncSearchIterator
from AdsClient.api.auth import resolve_token
from AdsClient.api.client import AdsApiClient
from AdsClient.api.export import ExportFormat, ExportRequest, bibcodes_from_documents, collect_bibcodes
from AdsClient.api.pagination import IteratorState, PaginationState, SearchIterator
from AdsClient.api.search import DEFAULT_FIELDS, MAX_ROWS, SearchQuery

__all__ = [
    "AdsApiClient",
    "AsyncSearchIterator",
    "DEFAULT_FIELDS",
    "ExportFormat",
    "ExportRequest",
    "IteratorState",
    "MAX_ROWS",
    "PaginationState",
    "SearchIterator",
    "SearchQuery",
    "bibcodes_from_documents",
    "collect_bibcodes",
    "resolve_token",
]
