"""Shared helpers for configuration loading and validation.

Every helper raises `ConfigurationError` naming the dotted config key, so a
bad value reported from YAML, the environment or a CLI flag reads the same.
"""

from __future__ import annotations

from typing import Any, Mapping

from GhpConnector.errors import ConfigurationError


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ConfigurationError: If the section is required but missing, or is
            not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ConfigurationError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"{key} must be an object")
    return section


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    """Return a required field value from a section.

    Args:
        section: Section mapping.
        field: Field name in section.
        config_key: Full key path for error messages.

    Returns:
        Raw field value.

    Raises:
        ConfigurationError: If field is missing.
    """
    if field not in section:
        raise ConfigurationError(f"Missing required config: {config_key}")
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return optional field value with default."""
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise ConfigurationError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string value that may be null or blank.

    Blank strings are returned as None.
    """
    if value is None:
        return None
    text = expect_str(value, config_key).strip()
    return text or None


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise ConfigurationError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{config_key} must be an integer")
    return value


def expect_float(value: Any, config_key: str) -> float:
    """Validate and return float value from numeric input."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{config_key} must be a number")
    return float(value)


def check_choice(value: str, allowed: set[str], config_key: str) -> None:
    """Validate that a string belongs to a fixed set of values."""
    if value not in allowed:
        raise ConfigurationError(f"{config_key} must be one of {sorted(allowed)}")
