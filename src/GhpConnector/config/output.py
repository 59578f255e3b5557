"""Output domain configuration: default format and text rendering options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from dateutil import tz

from GhpConnector.config.common import (
    check_choice,
    expect_bool,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)
from GhpConnector.errors import ConfigurationError
from GhpConnector.formatters.base import KNOWN_FORMATS
from GhpConnector.formatters.config import DATE_FORMATS


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    format: str
    use_colors: bool
    date_format: str
    timezone: str
    detailed: bool
    indent_size: int


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed output configuration. ``date_format`` is normalized to its
        canonical spelling (``ISO``, ``local``, ``relative``) when known.

    Raises:
        ConfigurationError: If a value has the wrong type.
    """
    section = get_section(raw, "output", required=False)
    date_format = expect_str(get_optional_value(section, "date_format", "local"), "output.date_format")
    return OutputConfig(
        format=expect_str(get_optional_value(section, "format", "human"), "output.format").lower(),
        use_colors=expect_bool(get_optional_value(section, "use_colors", True), "output.use_colors"),
        date_format=DATE_FORMATS.get(date_format.lower(), date_format),
        timezone=expect_str(get_optional_value(section, "timezone", "local"), "output.timezone"),
        detailed=expect_bool(get_optional_value(section, "detailed", False), "output.detailed"),
        indent_size=expect_int(get_optional_value(section, "indent_size", 2), "output.indent_size"),
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Args:
        config: Parsed output configuration.

    Raises:
        ConfigurationError: If values violate output constraints.
    """
    check_choice(config.format, set(KNOWN_FORMATS), "output.format")
    check_choice(config.date_format, set(DATE_FORMATS.values()), "output.date_format")
    if config.timezone != "local" and tz.gettz(config.timezone) is None:
        raise ConfigurationError(f"output.timezone is not a known timezone: {config.timezone}")
    if config.indent_size < 0:
        raise ConfigurationError("output.indent_size must be >= 0")
