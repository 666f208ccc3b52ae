"""Export domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from AdsClient.api.export import ExportFormat
from AdsClient.config.common import expect_optional_str, get_section


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Store the default export format and custom format string."""

    format: ExportFormat | None = None
    custom_format: str | None = None


def load_export(raw: Mapping[str, Any]) -> ExportConfig:
    """Load the ``export`` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If the format name is unknown.
    """
    section = get_section(raw, "export")
    format_name = expect_optional_str(section.get("format"), "export.format")
    return ExportConfig(
        format=ExportFormat.parse(format_name) if format_name else None,
        custom_format=expect_optional_str(section.get("custom_format"), "export.custom_format"),
    )


def check_export(config: ExportConfig) -> None:
    """Validate export constraints.

    A custom format without ``custom_format`` is accepted here because the
    string may come from ``--custom-format``; the export request checks it
    before anything is sent.

    Raises:
        ValueError: If ``custom_format`` is set but blank.
    """
    if config.custom_format is not None and not config.custom_format.strip():
        raise ValueError("export.custom_format must not be empty when set")
