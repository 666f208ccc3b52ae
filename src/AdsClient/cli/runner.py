"""Command runner for coordinating CLI execution.

Manages client lifecycle, logging configuration, and error handling for
command execution.
"""

from __future__ import annotations

import dataclasses
import sys
from typing import Callable

import click

from AdsClient.api.client import AdsApiClient
from AdsClient.api.export import ExportFormat
from AdsClient.cli.commands import ExportCommand, SearchCommand
from AdsClient.config import AppConfig
from AdsClient.core.sort import Sort
from AdsClient.renderers import JsonLinesWriter, OutputWriter
from AdsClient.utils.log import configure_logging, log


def create_client(config: AppConfig, token: str | None = None) -> AdsApiClient:
    """Build an API client from config.

    An explicit ``token`` wins over ``api.token``; with neither, the token is
    discovered from the environment and ``~/.ads``.
    """
    token = token or config.api.token
    options = {
        "base_url": config.api.base_url,
        "user_agent": config.api.user_agent,
        "timeout": config.api.timeout,
    }
    if token:
        return AdsApiClient(token, **options)
    return AdsApiClient.from_env(**options)


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_search(
        self,
        action: str,
        *,
        query: str,
        token: str | None = None,
        sorts: tuple[Sort, ...] = (),
        limit: int | None = None,
        fields: tuple[str, ...] = (),
        filter_query: str | None = None,
        rows: int | None = None,
        export_format: ExportFormat | None = None,
        custom_format: str | None = None,
    ) -> None:
        """Execute a search; command-line values override the ``search`` config.

        Raises:
            click.Abort: When the search fails.
        """
        defaults = self.config.search
        search = dataclasses.replace(
            defaults,
            fields=fields or defaults.fields,
            sort=sorts or defaults.sort,
            filter=filter_query if filter_query is not None else defaults.filter,
            rows=rows if rows is not None else defaults.rows,
            limit=limit if limit is not None else defaults.limit,
        )
        self._run(
            action,
            token,
            lambda client, writer: SearchCommand(
                client=client,
                query=query,
                search=search,
                output_writer=writer,
                export_format=export_format,
                custom_format=custom_format or self.config.export.custom_format,
            ),
        )

    def run_export(
        self,
        action: str,
        *,
        export_format: ExportFormat,
        bibcodes: tuple[str, ...],
        token: str | None = None,
        sorts: tuple[Sort, ...] = (),
        custom_format: str | None = None,
    ) -> None:
        """Export a list of bibcodes.

        Raises:
            click.Abort: When the export fails.
        """
        self._run(
            action,
            token,
            lambda client, writer: ExportCommand(
                client=client,
                export_format=export_format,
                bibcodes=bibcodes,
                sort=sorts or self.config.search.sort,
                custom_format=custom_format or self.config.export.custom_format,
                output_writer=writer,
            ),
        )

    def _run(
        self,
        action: str,
        token: str | None,
        build: Callable[[AdsApiClient, OutputWriter], SearchCommand | ExportCommand],
    ) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            output_writer = JsonLinesWriter(sys.stdout)
            with create_client(self.config, token) as client:
                command = build(client, output_writer)
                command.execute()
                output_writer.finalize()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
