"""Error taxonomy shared by the CLI, the GitHub client and the formatters.

Every error raised on purpose by GhpConnector derives from `GhpError` and
carries the process exit status the CLI should use for it.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ExitCode(IntEnum):
    """Process exit statuses used by the ``ghp`` command."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    VALIDATION_ERROR = 2
    NETWORK_ERROR = 3
    AUTHENTICATION_ERROR = 4
    NOT_FOUND_ERROR = 5
    GITHUB_API_ERROR = 6
    CONFIGURATION_ERROR = 7


class GhpError(Exception):
    """Base class for all GhpConnector errors.

    Attributes:
        message: Human readable error message.
        exit_code: Exit status the CLI maps this error to.
    """

    exit_code: ExitCode = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(GhpError):
    """Raised when user input fails validation."""

    exit_code = ExitCode.VALIDATION_ERROR


class NetworkError(GhpError):
    """Raised when the GitHub API cannot be reached."""

    exit_code = ExitCode.NETWORK_ERROR


class AuthenticationError(GhpError):
    """Raised when GitHub rejects the configured credentials."""

    exit_code = ExitCode.AUTHENTICATION_ERROR


class NotFoundError(GhpError):
    """Raised when a repository or issue does not exist."""

    exit_code = ExitCode.NOT_FOUND_ERROR


class GitHubAPIError(GhpError):
    """Raised for any other unsuccessful GitHub API response.

    Attributes:
        response: Decoded response payload, if any.
        status_code: HTTP status code, if known.
    """

    exit_code = ExitCode.GITHUB_API_ERROR

    def __init__(self, message: str, response: Any = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.response = response
        self.status_code = status_code


class ConfigurationError(GhpError):
    """Raised when configuration is missing or invalid."""

    exit_code = ExitCode.CONFIGURATION_ERROR
