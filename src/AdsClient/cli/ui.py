"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import click
from dotenv import load_dotenv

from AdsClient.api.export import ExportFormat
from AdsClient.api.search import MAX_ROWS
from AdsClient.cli.runner import CommandRunner
from AdsClient.config import load_config
from AdsClient.core.sort import Sort

JSON_OUTPUT = "json"


def _parse_sorts(ctx: click.Context, param: click.Parameter, values: Iterable[str]) -> tuple[Sort, ...]:
    try:
        return tuple(Sort.parse(value) for value in values)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _parse_export_format(ctx: click.Context, param: click.Parameter, value: str | None) -> ExportFormat | str | None:
    if value is None:
        return None
    if value.lower() == JSON_OUTPUT:
        return JSON_OUTPUT
    try:
        return ExportFormat.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


token_option = click.option(
    "--token",
    default=None,
    help="ADS API token; overrides api.token and the environment.",
)
sort_option = click.option(
    "--sort",
    "sorts",
    multiple=True,
    callback=_parse_sorts,
    help='Sort key as "field [asc|desc]"; repeatable, highest priority first.',
)
custom_format_option = click.option(
    "--custom-format",
    default=None,
    help="Format string for the custom export format.",
)


@click.group(help="Search the NASA ADS literature database and export citations.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="YAML config file, merged over the packaged defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config, so
    ``ADS_API_TOKEN`` can be kept there.
    """
    load_dotenv()

    try:
        ctx.obj = load_config(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid config: {e}") from e


@cli.command("search")
@click.argument("query", nargs=-1, required=True)
@token_option
@sort_option
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Maximum number of documents.")
@click.option("--field", "fields", multiple=True, help="Field to return; repeatable.")
@click.option("--filter", "filter_query", default=None, help="Filter query (fq).")
@click.option("--rows", type=click.IntRange(1, MAX_ROWS), default=None, help="Documents per page.")
@click.option(
    "--format",
    "export_format",
    default=None,
    callback=_parse_export_format,
    help="'json' for one JSON document per line, or an export format name.",
)
@custom_format_option
@click.pass_context
def search_cmd(
    ctx: click.Context,
    query: tuple[str, ...],
    token: str | None,
    sorts: tuple[Sort, ...],
    limit: int | None,
    fields: tuple[str, ...],
    filter_query: str | None,
    rows: int | None,
    export_format: ExportFormat | str | None,
    custom_format: str | None,
) -> None:
    """Search ADS and print matching documents.

    Without --format the config default applies, falling back to JSON lines.

    Raises:
        click.Abort: When the search fails.
    """
    if export_format is None:
        export_format = ctx.obj.export.format
    elif export_format == JSON_OUTPUT:
        export_format = None
    runner = CommandRunner(ctx.obj)
    runner.run_search(
        action=ctx.command.name,
        query=" ".join(query),
        token=token,
        sorts=sorts,
        limit=limit,
        fields=fields,
        filter_query=filter_query,
        rows=rows,
        export_format=export_format,
        custom_format=custom_format,
    )


@cli.command("export")
@click.argument("export_format", metavar="FORMAT", callback=_parse_export_format)
@click.argument("bibcodes", nargs=-1, required=True)
@token_option
@sort_option
@custom_format_option
@click.pass_context
def export_cmd(
    ctx: click.Context,
    export_format: ExportFormat | str | None,
    bibcodes: tuple[str, ...],
    token: str | None,
    sorts: tuple[Sort, ...],
    custom_format: str | None,
) -> None:
    """Export bibcodes in FORMAT and print the result.

    Raises:
        click.Abort: When the export fails.
    """
    if not isinstance(export_format, ExportFormat):
        raise click.BadParameter("an export format is required", param_hint="FORMAT")
    runner = CommandRunner(ctx.obj)
    runner.run_export(
        action=ctx.command.name,
        export_format=export_format,
        bibcodes=bibcodes,
        token=token,
        sorts=sorts,
        custom_format=custom_format,
    )
