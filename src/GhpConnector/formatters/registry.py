"""Formatter registry.

Maps format identifiers to formatter instances and remembers one default
identifier.
"""

from __future__ import annotations

from GhpConnector.formatters.base import HUMAN, Formatter, FormatType
from GhpConnector.formatters.errors import UnsupportedFormatError
from GhpConnector.utils.log import log


class FormatterRegistry:
    """Lookup table from format identifier to formatter.

    Registration is last-write-wins per identifier. The default identifier
    starts as ``human`` and can only be moved to a registered identifier.
    """

    def __init__(self, default_format: FormatType = HUMAN) -> None:
        self._formatters: dict[FormatType, Formatter] = {}
        self._default_format = default_format

    def register(self, formatter: Formatter) -> None:
        """Register a formatter for every identifier it declares.

        Args:
            formatter: Formatter to register.
        """
        for format_type in formatter.supported_formats():
            self.register_for_format(format_type, formatter)

    def register_for_format(self, format_type: FormatType, formatter: Formatter) -> None:
        """Register a formatter for one identifier, replacing any previous one.

        Args:
            format_type: Identifier to associate.
            formatter: Formatter to register.
        """
        previous = self._formatters.get(format_type)
        if previous is not None and previous is not formatter:
            log.debug("Replacing formatter for format=%s (%s -> %s)", format_type,
                      type(previous).__name__, type(formatter).__name__)
        self._formatters[format_type] = formatter

    def get_formatter(self, format_type: FormatType) -> Formatter:
        """Return the formatter registered for an identifier.

        Raises:
            UnsupportedFormatError: If nothing is registered for ``format_type``.
        """
        formatter = self._formatters.get(format_type)
        if formatter is None:
            raise UnsupportedFormatError(format_type)
        return formatter

    def has_formatter(self, format_type: FormatType) -> bool:
        return format_type in self._formatters

    @property
    def default_format(self) -> FormatType:
        """Current default format identifier."""
        return self._default_format

    def set_default_format(self, format_type: FormatType) -> None:
        """Change the default identifier.

        Raises:
            UnsupportedFormatError: If ``format_type`` is not registered.
        """
        if not self.has_formatter(format_type):
            raise UnsupportedFormatError(format_type)
        self._default_format = format_type

    def get_default_formatter(self) -> Formatter:
        """Return the formatter for the default identifier.

        Raises:
            UnsupportedFormatError: If the default identifier is no longer
                registered (for example after `clear`).
        """
        return self.get_formatter(self._default_format)

    def registered_formats(self) -> tuple[FormatType, ...]:
        """Return registered identifiers in registration order."""
        return tuple(self._formatters)

    def clear(self) -> None:
        """Drop every association.

        The default identifier is kept, so `get_default_formatter` fails
        until a formatter is registered for it again.
        """
        self._formatters.clear()
