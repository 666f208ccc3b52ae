"""ADS API client.

Thin transport layer over ``requests``: bearer authentication, JSON in and
out, and the mapping of HTTP failures onto the library's error types. Request
building and envelope decoding live in the search/export modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping
from urllib.parse import urljoin

import requests

from AdsClient import __version__
from AdsClient.api.parser import error_message
from AdsClient.core.errors import DecodeError, TokenNotFoundError, TransportError
from AdsClient.utils.log import log

if TYPE_CHECKING:
    from AdsClient.api.export import ExportFormat, ExportRequest
    from AdsClient.api.search import SearchQuery

API_BASE_URL = "https://api.adsabs.harvard.edu/v1/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"ads-client/{__version__}"


class AdsApiClient:
    """Low-level HTTP client for the ADS API.

    Every request carries the bearer token given at construction time. The
    client never retries: a failed request raises immediately.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = API_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            token: Resolved ADS API token.
            base_url: API root; relative endpoint paths are joined onto it.
            user_agent: Value of the ``User-Agent`` header.
            timeout: Per-request timeout in seconds.
            session: Optional pre-built session (mainly for tests).

        Raises:
            TokenNotFoundError: If ``token`` is empty.
        """
        token = (token or "").strip()
        if not token:
            raise TokenNotFoundError("API token must not be empty")
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "User-Agent": user_agent,
                "Accept": "application/json",
            }
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> AdsApiClient:
        """Build a client with a token discovered from the environment.

        See ``AdsClient.api.auth.resolve_token`` for the lookup order.
        """
        from AdsClient.api.auth import resolve_token

        return cls(resolve_token(), **kwargs)

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections."""
        self._session.close()

    def __enter__(self) -> AdsApiClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def search(self, query: str) -> SearchQuery:
        """Start a search request for ``query``."""
        from AdsClient.api.search import SearchQuery

        return SearchQuery(client=self, query=query)

    def export(self, export_format: ExportFormat | str, bibcodes: Iterable[str]) -> ExportRequest:
        """Start an export request for the given bibcodes."""
        from AdsClient.api.export import ExportRequest

        return ExportRequest.create(self, export_format, bibcodes)

    def absolute_url(self, path: str) -> str:
        """Join an endpoint path onto the API root."""
        return urljoin(self.base_url, path.lstrip("/"))

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Issue a GET request with query parameters and decode the JSON body.

        Args:
            path: Endpoint path relative to the API root, e.g. ``search/query``.
            params: Query parameters.

        Returns:
            Decoded JSON payload. Error envelopes reported by the server are
            returned as-is so the caller can surface the server message.

        Raises:
            TransportError: On network failures and HTTP errors without an
                error envelope.
            DecodeError: If a successful response is not valid JSON.
        """
        return self._request_json("GET", path, params=dict(params) if params else None)

    def post_json(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        """Issue a POST request with a JSON body and decode the JSON response.

        Args:
            path: Endpoint path relative to the API root, e.g. ``export/bibtex``.
            payload: JSON body.

        Returns:
            Decoded JSON payload (see ``get_json``).
        """
        return self._request_json("POST", path, json=dict(payload) if payload is not None else None)

    def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self.absolute_url(path)
        log.debug("ADS request: %s %s %s", method, url, kwargs.get("params") or "")
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as error:
            raise TransportError(f"{method} {path} failed: {error}") from error

        status = response.status_code
        log.debug("ADS response: status=%s", status)
        try:
            payload = response.json()
        except ValueError as error:
            if not response.ok:
                raise TransportError(f"HTTP {status} from {path}", status_code=status) from error
            raise DecodeError(f"Response from {path} is not valid JSON") from error

        if not response.ok and error_message(payload) is None:
            raise TransportError(f"HTTP {status} from {path}", status_code=status)
        return payload
