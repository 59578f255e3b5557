"""Formatter-specific error types."""

from __future__ import annotations

from GhpConnector.errors import ExitCode, GhpError


class FormatterError(GhpError):
    """Base error class for formatter errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ExitCode.GENERAL_ERROR)


class UnsupportedFormatError(FormatterError):
    """Raised when no formatter is registered for a format identifier."""

    def __init__(self, format_type: str) -> None:
        super().__init__(f"Unsupported format: {format_type}")
        self.format_type = format_type


class FormattingError(FormatterError):
    """Raised when a formatter fails while rendering.

    Attributes:
        original_error: The exception that caused the failure, if any.
    """

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(f"Error formatting data: {message}")
        self.original_error = original_error


class FormatterConfigurationError(FormatterError):
    """Raised when a formatter configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid formatter configuration: {message}")
