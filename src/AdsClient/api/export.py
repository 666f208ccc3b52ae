"""Export request builder for the ``export/<format>`` endpoint."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Protocol

from AdsClient.api.parser import parse_export_envelope
from AdsClient.core.errors import MissingFieldError, PreconditionError
from AdsClient.core.sort import Sort, SortLike, render_sort_list
from AdsClient.utils.log import log

if TYPE_CHECKING:
    from AdsClient.api.search import SearchQuery


class ExportFormat(str, Enum):
    """Output formats supported by the export endpoint."""

    BIBTEX = "bibtex"
    BIBTEXABS = "bibtexabs"
    ADS = "ads"
    ENDNOTE = "endnote"
    PROCITE = "procite"
    RIS = "ris"
    REFWORKS = "refworks"
    RSS = "rss"
    MEDLARS = "medlars"
    DCXML = "dcxml"
    REFXML = "refxml"
    REFABSXML = "refabsxml"
    AASTEX = "aastex"
    ICARUS = "icarus"
    MNRAS = "mnras"
    SOPH = "soph"
    VOTABLE = "votable"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, name: str) -> ExportFormat:
        """Look up a format by name, case-insensitively.

        Raises:
            ValueError: If the name is not a supported format.
        """
        try:
            return cls(name.strip().lower())
        except ValueError as error:
            choices = ", ".join(item.value for item in cls)
            raise ValueError(f"Unknown export format: {name!r} (expected one of: {choices})") from error


class ExportTransport(Protocol):
    """Minimal client interface needed to dispatch an export."""

    def post_json(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        """Issue a POST request and return the decoded JSON body."""
        ...


@dataclass(frozen=True, slots=True)
class ExportRequest:
    """A single, non-paginated export of a list of bibcodes.

    Attributes:
        client: Client used to dispatch the request.
        export_format: Target format.
        bibcodes: Bibcodes to export, in the given order.
        sort_list: Sort keys applied by the server.
        custom_format: Format string; used only with ``ExportFormat.CUSTOM``.
    """

    client: ExportTransport = dataclasses.field(repr=False, compare=False)
    export_format: ExportFormat
    bibcodes: tuple[str, ...]
    sort_list: tuple[Sort, ...] = ()
    custom_format: str | None = None

    @classmethod
    def create(
        cls,
        client: ExportTransport,
        export_format: ExportFormat | str,
        bibcodes: Iterable[str],
    ) -> ExportRequest:
        """Build a request, accepting a format name as well as an enum member."""
        if not isinstance(export_format, ExportFormat):
            export_format = ExportFormat.parse(export_format)
        return cls(client=client, export_format=export_format, bibcodes=tuple(bibcodes))

    def sort(self, sort: SortLike) -> ExportRequest:
        """Append a sort key; a bare field name sorts in descending order."""
        return dataclasses.replace(self, sort_list=(*self.sort_list, Sort.coerce(sort)))

    def format(self, custom_format: str) -> ExportRequest:
        """Set the custom format string.

        Required for ``ExportFormat.CUSTOM`` and ignored for other formats.
        See https://adsabs.github.io/help/actions/export for the codes.
        """
        return dataclasses.replace(self, custom_format=custom_format)

    @property
    def path(self) -> str:
        return f"export/{self.export_format.value}"

    def validate(self) -> None:
        """Check local preconditions.

        Raises:
            PreconditionError: If a custom export has no format string.
        """
        if self.export_format is ExportFormat.CUSTOM and not self.custom_format:
            raise PreconditionError("Custom export format requires a format string")

    def payload(self) -> dict[str, Any]:
        """Serialize to the JSON request body."""
        self.validate()
        body: dict[str, Any] = {"bibcode": list(self.bibcodes)}
        if self.sort_list:
            body["sort"] = render_sort_list(self.sort_list)
        if self.export_format is ExportFormat.CUSTOM:
            body["format"] = self.custom_format
        return body

    def send(self) -> str:
        """Submit the request and return the formatted text.

        Raises:
            PreconditionError: If the request is invalid; nothing is sent.
            RemoteRejectedError: If the server reports an error.
            DecodeError: If the response envelope is malformed.
            TransportError: On network or HTTP failures.
        """
        body = self.payload()
        log.debug("Export request: format=%s bibcodes=%d", self.export_format.value, len(self.bibcodes))
        return parse_export_envelope(self.client.post_json(self.path, body))


def bibcodes_from_documents(docs: Iterable[Any]) -> list[str]:
    """Extract bibcodes, failing fast on the first document without one.

    Raises:
        MissingFieldError: If a document has no ``bibcode``.
    """
    bibcodes: list[str] = []
    for index, doc in enumerate(docs):
        bibcode = getattr(doc, "bibcode", None)
        if not bibcode:
            raise MissingFieldError("bibcode", index=index)
        bibcodes.append(bibcode)
    return bibcodes


def collect_bibcodes(query: SearchQuery, *, limit: int | None = None) -> list[str]:
    """Drain a query with a ``bibcode``-only projection and return the bibcodes.

    Any field list already set on ``query`` is replaced. Errors raised while
    paginating propagate unchanged.
    """
    projected = dataclasses.replace(query, field_list=("bibcode",))
    return bibcodes_from_documents(projected.iter(limit=limit))
