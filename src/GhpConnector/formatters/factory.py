"""Formatter factory.

The factory is the only formatting entry point application code calls. It
resolves identifiers through a `FormatterRegistry`, applies runtime
configuration without mutating shared registry instances, and normalizes
errors into the formatter error taxonomy.
"""

from __future__ import annotations

from typing import Any

from GhpConnector.formatters.base import Cloneable, Configurable, Formatter, FormatType
from GhpConnector.formatters.config import FormatterConfig, validate_config
from GhpConnector.formatters.errors import FormatterError, FormattingError
from GhpConnector.formatters.registry import FormatterRegistry
from GhpConnector.utils.log import log


class FormatterFactory:
    """Create configured formatters and render data with them."""

    def __init__(self, registry: FormatterRegistry) -> None:
        """Initialize the factory.

        Args:
            registry: Registry used to resolve format identifiers.
        """
        self.registry = registry

    def create(self, format_type: FormatType, config: FormatterConfig | None = None) -> Formatter:
        """Return a formatter for ``format_type``.

        Without ``config`` the registered instance is returned as-is. With
        ``config``, a `Cloneable` formatter is cloned and the clone is
        configured; a formatter that is only `Configurable` is configured in
        place, which changes the shared registry instance for later callers.
        Formatters with neither capability ignore ``config``.

        Args:
            format_type: Format identifier.
            config: Optional runtime configuration.

        Returns:
            Formatter ready to render.

        Raises:
            UnsupportedFormatError: If the identifier is not registered.
            FormatterConfigurationError: If ``config`` is invalid.
            FormattingError: If cloning or configuring fails unexpectedly.
        """
        formatter = self.registry.get_formatter(format_type)
        if config is None:
            return formatter

        try:
            resolved = validate_config(config, format_type)
            if isinstance(formatter, Cloneable) and isinstance(formatter, Configurable):
                formatter = formatter.clone()
                formatter.configure(resolved)
            elif isinstance(formatter, Configurable):
                log.debug("Formatter %s is not cloneable; configuring shared instance",
                          type(formatter).__name__)
                formatter.configure(resolved)
            else:
                log.debug("Formatter %s takes no configuration; ignoring %s",
                          type(formatter).__name__, sorted(config))
        except FormatterError:
            raise
        except Exception as e:
            raise FormattingError(
                f"Failed to create formatter for format '{format_type}': {e}", e
            ) from e
        return formatter

    def create_default(self, config: FormatterConfig | None = None) -> Formatter:
        """Return the formatter for the registry's default identifier."""
        return self.create(self.registry.default_format, config)

    def format(  # noqa: A003 - mirrors Formatter.format
        self,
        data: Any,
        format_type: FormatType,
        config: FormatterConfig | None = None,
    ) -> str:
        """Render ``data`` with the formatter for ``format_type``.

        Args:
            data: JSON-like value to render.
            format_type: Format identifier.
            config: Optional runtime configuration.

        Returns:
            Rendered output.

        Raises:
            UnsupportedFormatError: If the identifier is not registered.
            FormatterConfigurationError: If ``config`` is invalid.
            FormattingError: For any other failure, wrapping the original.
        """
        formatter = self.create(format_type, config)
        try:
            return formatter.format(data)
        except FormatterError:
            raise
        except Exception as e:
            raise FormattingError(
                f"Error formatting data with format '{format_type}': {e}", e
            ) from e

    def format_with_default(self, data: Any, config: FormatterConfig | None = None) -> str:
        """Render ``data`` with the default formatter."""
        return self.format(data, self.registry.default_format, config)
