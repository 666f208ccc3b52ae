"""API connection configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from AdsClient.api.client import API_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from AdsClient.config.common import (
    expect_float,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Store validated API connection settings.

    ``token`` is optional; when absent the token is discovered from the
    environment and ``~/.ads``.
    """

    base_url: str = API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    token: str | None = None


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load the ``api`` section.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "api")
    defaults = ApiConfig()
    return ApiConfig(
        base_url=expect_str(get_optional_value(section, "base_url", defaults.base_url), "api.base_url"),
        timeout=expect_float(get_optional_value(section, "timeout", defaults.timeout), "api.timeout"),
        user_agent=expect_str(get_optional_value(section, "user_agent", defaults.user_agent), "api.user_agent"),
        token=expect_optional_str(section.get("token"), "api.token"),
    )


def check_api(config: ApiConfig) -> None:
    """Validate API settings.

    Raises:
        ValueError: If values violate API constraints.
    """
    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError("api.base_url must be an http(s) URL")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")
    if not config.user_agent.strip():
        raise ValueError("api.user_agent must not be empty")
    if config.token is not None and not config.token.strip():
        raise ValueError("api.token must not be empty when set")
