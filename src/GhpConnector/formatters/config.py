"""Formatter configuration defaults, merging and validation.

A formatter configuration is a plain mapping. Recognized keys depend on the
format family; unknown keys are dropped and ``None`` values count as "not
supplied", so a partially filled record coming from CLI flags never hides a
default.
"""

from __future__ import annotations

import copy
from typing import Any, Final, Mapping

from dateutil import tz

from GhpConnector.formatters.base import CSV, HUMAN, JSON, TABLE, TEXT, FormatType
from GhpConnector.formatters.errors import FormatterConfigurationError

FormatterConfig = Mapping[str, Any]

BASE_DEFAULTS: Final[dict[str, Any]] = {
    "use_colors": True,
    "max_width": 80,
}

FAMILY_DEFAULTS: Final[dict[str, dict[str, Any]]] = {
    "json": {
        "indent": 2,
        "sort_keys": False,
        "compact": False,
        "pretty": True,
    },
    "text": {
        "detailed": False,
        "date_format": "local",
        "timezone": "local",
        "indent_size": 2,
        "show_comments": False,
    },
    "table": {
        "columns": (),
        "headers": (),
        "alignment": {},
    },
}

_FAMILIES: Final[dict[FormatType, str]] = {
    JSON: "json",
    TEXT: "text",
    HUMAN: "text",
    TABLE: "table",
    CSV: "table",
}

DATE_FORMATS: Final[dict[str, str]] = {"iso": "ISO", "local": "local", "relative": "relative"}
ALIGNMENTS: Final[frozenset[str]] = frozenset({"left", "right", "center"})

_BOOL_KEYS = ("use_colors", "sort_keys", "compact", "pretty", "detailed", "show_comments")
_NON_NEGATIVE_INT_KEYS = ("indent", "indent_size")


def format_family(format_type: FormatType) -> str:
    """Return the configuration family of a format identifier.

    Identifiers without a family of their own (``minimal`` and anything a
    caller registers) fall back to ``"base"``.
    """
    return _FAMILIES.get(format_type, "base")


def default_config(format_type: FormatType) -> dict[str, Any]:
    """Return a fresh copy of the defaults for a format identifier."""
    defaults = dict(BASE_DEFAULTS)
    defaults.update(FAMILY_DEFAULTS.get(format_family(format_type), {}))
    return copy.deepcopy(defaults)


def validate_config(config: FormatterConfig | None, format_type: FormatType) -> dict[str, Any]:
    """Merge user configuration over the defaults of a format.

    Args:
        config: User supplied configuration, possibly ``None``.
        format_type: Target format identifier.

    Returns:
        A new dict holding every default key, with recognized user values
        shallow-merged on top.

    Raises:
        FormatterConfigurationError: If a supplied value is invalid.
    """
    merged = default_config(format_type)
    overrides = {
        key: value
        for key, value in (config or {}).items()
        if key in merged and value is not None
    }
    check_config(overrides, format_type)

    if "date_format" in overrides:
        overrides["date_format"] = DATE_FORMATS[overrides["date_format"].lower()]
    for key in ("columns", "headers"):
        if key in overrides:
            overrides[key] = tuple(overrides[key])
    if "alignment" in overrides:
        overrides["alignment"] = {name: align.lower() for name, align in overrides["alignment"].items()}

    merged.update(overrides)
    return merged


def check_config(overrides: FormatterConfig, format_type: FormatType) -> None:
    """Validate user supplied configuration values.

    Args:
        overrides: Recognized, non-None user values.
        format_type: Target format identifier (used in messages).

    Raises:
        FormatterConfigurationError: If a value has the wrong type or range,
            or if ``indent`` is combined with an explicit ``pretty=False``.
    """
    for key in _BOOL_KEYS:
        if key in overrides and not isinstance(overrides[key], bool):
            raise FormatterConfigurationError(f"{format_type}.{key} must be a boolean")

    for key in _NON_NEGATIVE_INT_KEYS:
        if key in overrides:
            _expect_int(overrides[key], f"{format_type}.{key}", minimum=0)

    if "max_width" in overrides:
        _expect_int(overrides["max_width"], f"{format_type}.max_width", minimum=1)

    if "indent" in overrides and overrides.get("pretty") is False and not overrides.get("compact"):
        raise FormatterConfigurationError(f"{format_type}.indent requires pretty output")

    if "date_format" in overrides:
        value = overrides["date_format"]
        if not isinstance(value, str) or value.lower() not in DATE_FORMATS:
            raise FormatterConfigurationError(
                f"{format_type}.date_format must be one of {sorted(DATE_FORMATS.values())}"
            )

    if "timezone" in overrides:
        value = overrides["timezone"]
        if not isinstance(value, str) or not value.strip():
            raise FormatterConfigurationError(f"{format_type}.timezone must be a non-empty string")
        if value != "local" and tz.gettz(value) is None:
            raise FormatterConfigurationError(f"{format_type}.timezone is not a known timezone: {value}")

    for key in ("columns", "headers"):
        if key in overrides:
            value = overrides[key]
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise FormatterConfigurationError(f"{format_type}.{key} must be a list of strings")
            for idx, item in enumerate(value):
                if not isinstance(item, str):
                    raise FormatterConfigurationError(f"{format_type}.{key}[{idx}] must be a string")

    if "alignment" in overrides:
        value = overrides["alignment"]
        if not isinstance(value, Mapping):
            raise FormatterConfigurationError(f"{format_type}.alignment must be a mapping")
        for column, align in value.items():
            if not isinstance(align, str) or align.lower() not in ALIGNMENTS:
                raise FormatterConfigurationError(
                    f"{format_type}.alignment.{column} must be one of {sorted(ALIGNMENTS)}"
                )


def _expect_int(value: Any, config_key: str, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatterConfigurationError(f"{config_key} must be an integer")
    if value < minimum:
        raise FormatterConfigurationError(f"{config_key} must be >= {minimum}")
