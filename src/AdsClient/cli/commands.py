"""Command implementations for the ADS CLI.

Encapsulates the search and export flows, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass

from AdsClient.api.client import AdsApiClient
from AdsClient.api.export import ExportFormat, collect_bibcodes
from AdsClient.api.search import SearchQuery
from AdsClient.config import SearchConfig
from AdsClient.core.errors import PreconditionError
from AdsClient.core.sort import Sort
from AdsClient.renderers import OutputWriter
from AdsClient.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one search and write documents, or export what it matched.

    With ``export_format`` unset every document is written as it is paged in.
    Otherwise the search is drained for bibcodes only and a single export of
    those bibcodes is written.
    """

    client: AdsApiClient
    query: str
    search: SearchConfig
    output_writer: OutputWriter
    export_format: ExportFormat | None = None
    custom_format: str | None = None

    def build_query(self) -> SearchQuery:
        request = self.client.search(self.query)
        for name in self.search.fields:
            request = request.field(name)
        if self.search.filter:
            request = request.filter(self.search.filter)
        if self.search.rows is not None:
            request = request.rows(self.search.rows)
        for sort in self.search.sort:
            request = request.sort(sort)
        return request

    def execute(self) -> None:
        request = self.build_query()
        log.info("query=%s", self.query)
        if self.export_format is None:
            results = request.iter(limit=self.search.limit)
            count = 0
            for doc in results:
                self.output_writer.write_document(doc)
                count += 1
            log.info("Fetched %d of %d documents", count, results.num_found)
            return

        if self.export_format is ExportFormat.CUSTOM and not self.custom_format:
            raise PreconditionError("Custom export format requires --custom-format or export.custom_format")
        bibcodes = collect_bibcodes(request, limit=self.search.limit)
        log.info("Exporting %d documents as %s", len(bibcodes), self.export_format.value)
        if not bibcodes:
            log.warning("No documents matched; nothing to export")
            return
        ExportCommand(
            client=self.client,
            export_format=self.export_format,
            bibcodes=tuple(bibcodes),
            sort=self.search.sort,
            custom_format=self.custom_format,
            output_writer=self.output_writer,
        ).execute()


@dataclass(slots=True)
class ExportCommand:
    """Export a fixed list of bibcodes in one request."""

    client: AdsApiClient
    export_format: ExportFormat
    bibcodes: tuple[str, ...]
    output_writer: OutputWriter
    sort: tuple[Sort, ...] = ()
    custom_format: str | None = None

    def execute(self) -> None:
        request = self.client.export(self.export_format, self.bibcodes)
        for sort in self.sort:
            request = request.sort(sort)
        if self.custom_format:
            request = request.format(self.custom_format)
        log.debug("Export bibcodes=%s", ",".join(self.bibcodes))
        self.output_writer.write_text(request.send())
