"""``log`` section: console level and optional per-run log files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from AdsClient.config.common import expect_bool, expect_str, get_optional_value, get_section

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings.

    The default level is WARNING so that a plain ``ads search`` prints
    nothing but results.
    """

    level: str = "WARNING"
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Read the ``log`` section; the level name is upper-cased.

    Raises:
        TypeError: If a value has the wrong type.
    """
    section = get_section(raw, "log")
    defaults = RuntimeConfig()
    level = expect_str(get_optional_value(section, "level", defaults.level), "log.level")
    return RuntimeConfig(
        level=level.strip().upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", defaults.to_file), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", defaults.dir), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Reject unknown level names and an empty log folder.

    Raises:
        ValueError: If a value is out of range.
    """
    if config.level not in LOG_LEVELS:
        raise ValueError(f"log.level must be one of {', '.join(LOG_LEVELS)}; got {config.level!r}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file is true")
