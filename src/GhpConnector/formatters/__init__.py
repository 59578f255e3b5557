"""Output formatters.

Application code wires one registry and one factory at startup with
`create_default_factory` and passes the factory to whatever renders output.
`format_output` is a one-shot convenience built on the same pieces.
"""

from __future__ import annotations

from typing import Any

from GhpConnector.formatters.base import (
    CSV,
    HUMAN,
    JSON,
    KNOWN_FORMATS,
    MINIMAL,
    TABLE,
    TEXT,
    BaseFormatter,
    Cloneable,
    Configurable,
    Formatter,
    FormatType,
    OptionsFormatter,
)
from GhpConnector.formatters.config import FormatterConfig, validate_config
from GhpConnector.formatters.errors import (
    FormatterConfigurationError,
    FormatterError,
    FormattingError,
    UnsupportedFormatError,
)
from GhpConnector.formatters.factory import FormatterFactory
from GhpConnector.formatters.json import JsonFormatter
from GhpConnector.formatters.minimal import MinimalFormatter
from GhpConnector.formatters.registry import FormatterRegistry
from GhpConnector.formatters.table import CsvFormatter, TableFormatter
from GhpConnector.formatters.text import HumanFormatter, TextFormatter


def create_default_registry() -> FormatterRegistry:
    """Return a registry holding one instance of every built-in formatter.

    The default format is ``human``.
    """
    registry = FormatterRegistry()
    for formatter in (
        JsonFormatter(),
        TextFormatter(),
        HumanFormatter(),
        TableFormatter(),
        CsvFormatter(),
        MinimalFormatter(),
    ):
        registry.register(formatter)
    registry.set_default_format(HUMAN)
    return registry


def create_default_factory(registry: FormatterRegistry | None = None) -> FormatterFactory:
    """Return a factory over ``registry`` or a fresh default registry."""
    return FormatterFactory(registry if registry is not None else create_default_registry())


def format_output(
    data: Any,
    format_type: FormatType = HUMAN,
    config: FormatterConfig | None = None,
    *,
    factory: FormatterFactory | None = None,
) -> str:
    """Render ``data`` in one call.

    Args:
        data: JSON-like value to render.
        format_type: Format identifier, ``human`` by default.
        config: Optional runtime configuration.
        factory: Factory to use; a fresh default factory when omitted.

    Returns:
        Rendered output. Unless ``use_colors`` is False, the text, human and
        table formats contain ANSI escape codes from `click.style`;
        `click.echo` removes them when stdout is not a terminal.
    """
    factory = factory if factory is not None else create_default_factory()
    return factory.format(data, format_type, config)


__all__ = [
    "CSV",
    "HUMAN",
    "JSON",
    "KNOWN_FORMATS",
    "MINIMAL",
    "TABLE",
    "TEXT",
    "BaseFormatter",
    "Cloneable",
    "Configurable",
    "CsvFormatter",
    "Formatter",
    "FormatterConfig",
    "FormatterConfigurationError",
    "FormatterError",
    "FormatterFactory",
    "FormatterRegistry",
    "FormatType",
    "FormattingError",
    "HumanFormatter",
    "JsonFormatter",
    "MinimalFormatter",
    "OptionsFormatter",
    "TableFormatter",
    "TextFormatter",
    "UnsupportedFormatError",
    "create_default_factory",
    "create_default_registry",
    "format_output",
    "validate_config",
]
