from __future__ import annotations

"""Validation helpers shared by the configuration sections."""

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return a top-level section, or an empty mapping if it is absent.

    Raises:
        TypeError: If the section is present but not a mapping.
    """
    section = raw.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a field value that must be present.

    Raises:
        ValueError: If field is missing.
    """
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field]


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def read_bool(section: Mapping[str, Any], field: str, section_key: str) -> bool:
    """Read a required boolean ``section_key.field``."""
    config_key = f"{section_key}.{field}"
    return expect_bool(get_required_value(section, field, config_key), config_key)


def reject_unknown_keys(section: Mapping[str, Any], allowed: set[str], section_key: str) -> None:
    """Fail on misspelled keys instead of silently ignoring them.

    Raises:
        ValueError: If the section holds keys outside ``allowed``.
    """
    unknown = sorted(set(section) - allowed)
    if unknown:
        raise ValueError(f"Unknown config keys in {section_key}: {', '.join(unknown)}")
