"""ADS response envelope parser."""

from __future__ import annotations

from typing import Any, Mapping

from AdsClient.core.errors import DecodeError, RemoteRejectedError
from AdsClient.core.models import Document, SearchPage


def parse_search_envelope(payload: Any) -> SearchPage:
    """Decode a search envelope into a ``SearchPage``.

    Args:
        payload: Decoded JSON body of a ``search/query`` response.

    Returns:
        The page of documents described by ``payload["response"]``.

    Raises:
        RemoteRejectedError: If the envelope carries ``error.msg``.
        DecodeError: If the envelope does not have the expected shape.
    """
    _raise_remote_error(payload)
    if not isinstance(payload, Mapping):
        raise DecodeError("Search envelope must be an object")

    response = payload.get("response")
    if not isinstance(response, Mapping):
        raise DecodeError("Search envelope is missing 'response'")

    num_found = _expect_count(response, "numFound")
    start = _expect_count(response, "start")
    docs = response.get("docs")
    if not isinstance(docs, list):
        raise DecodeError("Search response 'docs' must be a list")

    return SearchPage(
        num_found=num_found,
        start=start,
        docs=tuple(Document.from_dict(doc) for doc in docs),
    )


def parse_export_envelope(payload: Any) -> str:
    """Extract the formatted text from an export envelope.

    Raises:
        RemoteRejectedError: If the envelope carries an error message.
        DecodeError: If ``export`` is missing or not a string.
    """
    _raise_remote_error(payload)
    if not isinstance(payload, Mapping):
        raise DecodeError("Export envelope must be an object")
    export = payload.get("export")
    if not isinstance(export, str):
        raise DecodeError("Export envelope is missing 'export'")
    return export


def error_message(payload: Any) -> str | None:
    """Return the server-reported error message, if any.

    The search endpoint reports ``{"error": {"msg": ...}}``; other endpoints
    sometimes use a bare ``{"error": "..."}`` string.
    """
    if not isinstance(payload, Mapping):
        return None
    error = payload.get("error")
    if isinstance(error, Mapping):
        msg = error.get("msg")
        return msg if isinstance(msg, str) else None
    if isinstance(error, str):
        return error
    return None


def _raise_remote_error(payload: Any) -> None:
    message = error_message(payload)
    if message is not None:
        raise RemoteRejectedError(message)


def _expect_count(section: Mapping[str, Any], key: str) -> int:
    value = section.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"Search response '{key}' must be a non-negative integer")
    return value
