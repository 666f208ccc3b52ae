"""Sort specifications shared by the search and export requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class SortDirection(str, Enum):
    """Sort direction as rendered on the wire."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class Sort:
    """A field name plus a sort direction.

    Rendered as ``"<field> asc"`` or ``"<field> desc"``. A bare field name
    converts to a descending sort, which matches the relevancy-first ordering
    of the ADS API and of the other ADS clients. Field validity is left to the
    server.

    Attributes:
        field: Field to sort on, e.g. ``date`` or ``citation_count``.
        direction: Sort direction.
    """

    field: str
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def ascending(cls, field: str) -> Sort:
        """Build an ascending sort on a field."""
        return cls(field=field, direction=SortDirection.ASC)

    @classmethod
    def descending(cls, field: str) -> Sort:
        """Build a descending sort on a field."""
        return cls(field=field, direction=SortDirection.DESC)

    @classmethod
    def coerce(cls, value: SortLike) -> Sort:
        """Convert a bare field name into a descending sort.

        ``Sort`` instances are returned unchanged.
        """
        if isinstance(value, Sort):
            return value
        return cls.descending(value)

    @classmethod
    def parse(cls, text: str) -> Sort:
        """Parse ``"field"``, ``"field asc"`` or ``"field desc"``.

        Args:
            text: Sort shorthand as typed on the command line or in config.

        Returns:
            Parsed sort; the direction defaults to descending.

        Raises:
            ValueError: If the text is empty or the direction is unknown.
        """
        parts = text.split()
        if not parts or len(parts) > 2:
            raise ValueError(f"Invalid sort specification: {text!r}")
        if len(parts) == 1:
            return cls.descending(parts[0])
        try:
            direction = SortDirection(parts[1].lower())
        except ValueError as error:
            raise ValueError(f"Invalid sort direction in {text!r}; expected asc or desc") from error
        return cls(field=parts[0], direction=direction)

    def render(self) -> str:
        """Render to the wire syntax."""
        return f"{self.field} {self.direction.value}"

    def __str__(self) -> str:
        return self.render()


SortLike = Union[Sort, str]


def render_sort_list(sorts: Iterable[Sort]) -> str:
    """Comma-join rendered sorts in insertion order."""
    return ",".join(sort.render() for sort in sorts)
