"""Error taxonomy for the ADS client.

Every failure raised by the library derives from ``AdsError`` so callers can
catch the whole family at a boundary, while the subclasses keep the cases
apart:

- ``TransportError``: network or HTTP-level failure.
- ``RemoteRejectedError``: the server answered with its own error message.
- ``DecodeError``: the response envelope did not have the expected shape.
- ``PreconditionError``: a request could not be built locally.
- ``TokenNotFoundError``: no API token could be resolved.

Nothing in the library retries on any of these.
"""

from __future__ import annotations


class AdsError(Exception):
    """Base class for all ADS client errors."""


class TransportError(AdsError):
    """Network or HTTP failure while talking to the API.

    Attributes:
        status_code: HTTP status code when a response was received.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteRejectedError(AdsError):
    """The API reported an application error for a well-formed request.

    Attributes:
        message: Diagnostic message reported by the server.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(AdsError):
    """The response envelope does not match the expected structure."""


class PreconditionError(AdsError):
    """A request cannot be built from the values supplied by the caller."""


class MissingFieldError(PreconditionError):
    """A document lacks a field that is required to build a request.

    Attributes:
        field: Name of the missing document field.
    """

    def __init__(self, field: str, *, index: int | None = None) -> None:
        where = f" (document #{index})" if index is not None else ""
        super().__init__(f"Document is missing required field '{field}'{where}")
        self.field = field
        self.index = index


class TokenNotFoundError(AdsError):
    """No API token could be found in any of the supported locations."""

    def __init__(self, message: str = "could not find API token") -> None:
        super().__init__(message)
