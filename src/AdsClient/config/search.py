"""Search domain configuration: default projection, sorting and limits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from AdsClient.api.search import MAX_ROWS
from AdsClient.config.common import (
    expect_optional_int,
    expect_optional_str,
    expect_str_list,
    get_optional_value,
    get_section,
)
from AdsClient.core.sort import Sort


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated defaults applied to every search.

    Attributes:
        fields: Field projection; empty means the server-side default set.
        rows: Page size; ``None`` lets the paginator use the maximum.
        sort: Sort keys in priority order.
        filter: Optional filter query (``fq``).
        limit: Optional cap on the total number of documents.
    """

    fields: tuple[str, ...] = ()
    rows: int | None = None
    sort: tuple[Sort, ...] = ()
    filter: str | None = None
    limit: int | None = None


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the ``search`` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a sort entry cannot be parsed.
    """
    section = get_section(raw, "search")
    fields = expect_str_list(get_optional_value(section, "fields", []), "search.fields")
    sort_items = expect_str_list(get_optional_value(section, "sort", []), "search.sort")
    sorts: list[Sort] = []
    for idx, item in enumerate(sort_items):
        try:
            sorts.append(Sort.parse(item))
        except ValueError as error:
            raise ValueError(f"search.sort[{idx}]: {error}") from error
    return SearchConfig(
        fields=tuple(item.strip() for item in fields if item.strip()),
        rows=expect_optional_int(section.get("rows"), "search.rows"),
        sort=tuple(sorts),
        filter=expect_optional_str(section.get("filter"), "search.filter"),
        limit=expect_optional_int(section.get("limit"), "search.limit"),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Args:
        config: Parsed search configuration.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.rows is not None and not 1 <= config.rows <= MAX_ROWS:
        raise ValueError(f"search.rows must be between 1 and {MAX_ROWS}")
    if config.limit is not None and config.limit < 0:
        raise ValueError("search.limit must be >= 0")
