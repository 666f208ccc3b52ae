from __future__ import annotations

"""Typed getters shared by the per-section config loaders.

Every getter takes the dotted key of the value (e.g. ``search.rows``) so
errors point at the offending line of the YAML file.
"""

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool = False) -> Mapping[str, Any]:
    """Return the mapping stored under ``key``.

    A missing or null optional section reads as an empty mapping.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config section: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return ``section[field]``, or ``default`` when absent or null."""
    value = section.get(field)
    return default if value is None else value


def _check_type(value: Any, types: type | tuple[type, ...], config_key: str, label: str) -> Any:
    # bool is an int subclass; YAML ``yes``/``true`` must not pass as a number.
    if isinstance(value, bool) and bool not in (types if isinstance(types, tuple) else (types,)):
        raise TypeError(f"{config_key} must be {label}")
    if not isinstance(value, types):
        raise TypeError(f"{config_key} must be {label}")
    return value


def expect_str(value: Any, config_key: str) -> str:
    return _check_type(value, str, config_key, "a string")


def expect_optional_str(value: Any, config_key: str) -> str | None:
    return None if value is None else expect_str(value, config_key)


def expect_bool(value: Any, config_key: str) -> bool:
    return _check_type(value, bool, config_key, "true or false")


def expect_int(value: Any, config_key: str) -> int:
    return _check_type(value, int, config_key, "an integer")


def expect_optional_int(value: Any, config_key: str) -> int | None:
    return None if value is None else expect_int(value, config_key)


def expect_float(value: Any, config_key: str) -> float:
    """Accept ints and floats alike and return a float."""
    return float(_check_type(value, (int, float), config_key, "a number"))


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Return a list of strings; a scalar string counts as a one-item list."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list of strings")
    return [expect_str(item, f"{config_key}[{idx}]") for idx, item in enumerate(value)]
