from __future__ import annotations

"""Public configuration API for AdsClient."""

from AdsClient.config.api import ApiConfig
from AdsClient.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from AdsClient.config.export import ExportConfig
from AdsClient.config.runtime import RuntimeConfig
from AdsClient.config.search import SearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ApiConfig",
    "AppConfig",
    "ExportConfig",
    "RuntimeConfig",
    "SearchConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
