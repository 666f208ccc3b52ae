"""AdsClient: a client for the NASA ADS literature search API."""

from __future__ import annotations

__version__ = "0.2.0"

from AdsClient.api.client import AdsApiClient
from AdsClient.api.export import ExportFormat, ExportRequest
from AdsClient.api.pagination import SearchIterator
from AdsClient.api.search import SearchQuery
from AdsClient.core.errors import (
    AdsError,
    DecodeError,
    MissingFieldError,
    PreconditionError,
    RemoteRejectedError,
    TokenNotFoundError,
    TransportError,
)
from AdsClient.core.models import Document, SearchPage
from AdsClient.core.sort import Sort

__all__ = [
    "AdsApiClient",
    "AdsError",
    "DecodeError",
    "Document",
    "ExportFormat",
    "ExportRequest",
    "MissingFieldError",
    "PreconditionError",
    "RemoteRejectedError",
    "SearchIterator",
    "SearchPage",
    "SearchQuery",
    "Sort",
    "TokenNotFoundError",
    "TransportError",
    "__version__",
]
