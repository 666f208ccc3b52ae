from __future__ import annotations

"""Root ``AppConfig`` assembly and YAML file loading."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from AdsClient.config.api import ApiConfig, check_api, load_api
from AdsClient.config.export import ExportConfig, check_export, load_export
from AdsClient.config.runtime import RuntimeConfig, check_runtime, load_runtime
from AdsClient.config.search import SearchConfig, check_search, load_search

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """All config sections; each one falls back to its defaults."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Load and validate every section of an already-parsed YAML mapping."""
    runtime = load_runtime(raw)
    api = load_api(raw)
    search = load_search(raw)
    export = load_export(raw)

    check_runtime(runtime)
    check_api(api)
    check_search(search)
    check_export(export)

    return AppConfig(runtime=runtime, api=api, search=search, export=export)


def load_config(path: Path | None = None) -> AppConfig:
    """Load ``path`` merged over the packaged defaults; ``None`` loads the defaults alone."""
    return load_config_with_defaults(path or DEFAULT_CONFIG_PATH)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by deep-merging ``config_path`` over ``default_path``."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse YAML text; an empty document reads as an empty mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base``, recursing into nested mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
