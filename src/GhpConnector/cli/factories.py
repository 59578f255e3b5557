"""Factory functions for CLI component creation.

Centralizes component instantiation to reduce coupling between CLI and
implementations. Tests substitute the GitHub client by patching
`ClientFactory.create_client`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from GhpConnector.config import AppConfig, OutputConfig
from GhpConnector.errors import ValidationError
from GhpConnector.formatters import JSON, FormatterFactory, create_default_factory
from GhpConnector.github import GitHubClient
from GhpConnector.utils.log import log


class ClientFactory:
    """Factory for creating the GitHub client."""

    @staticmethod
    def create_client(config: AppConfig) -> GitHubClient:
        """Create a client for the configured repository.

        Raises:
            ConfigurationError: If owner or repo is not configured.
        """
        log.debug(
            "Creating GitHub client owner=%s repo=%s base_url=%s auth=%s",
            config.github.owner,
            config.github.repo,
            config.github.base_url,
            "token" if config.github.token else "anonymous",
        )
        return GitHubClient.from_config(config.github)


class FormatterFactoryBuilder:
    """Factory for the formatter factory shared by one CLI invocation."""

    @staticmethod
    def create_formatter_factory() -> FormatterFactory:
        return create_default_factory()


@dataclass(frozen=True, slots=True)
class OutputOptions:
    """Output flags as parsed by click; None means "not given"."""

    format: str | None = None
    pretty: bool | None = None
    compact: bool | None = None
    indent: int | None = None
    sort_keys: bool | None = None
    no_color: bool = False
    timezone: str | None = None
    date_format: str | None = None
    detailed: bool | None = None
    show_comments: bool | None = None


def check_format_options(format_type: str, options: OutputOptions) -> None:
    """Reject flag combinations that make no sense for the chosen format.

    Raises:
        ValidationError: If JSON-only flags are used with another format,
            or ``--indent`` is given for JSON without ``--pretty``.
    """
    json_flags = {
        "--pretty": options.pretty,
        "--compact": options.compact,
        "--sort-keys": options.sort_keys,
        "--indent": options.indent,
    }
    if format_type != JSON:
        for flag, value in json_flags.items():
            if value is not None and value is not False:
                raise ValidationError(
                    f"{flag} option is only valid when --format is 'json'. Current format: '{format_type}'."
                )
        return
    if options.indent is not None and not options.pretty and not options.compact:
        raise ValidationError("--indent option requires --pretty to be set for JSON format.")


def build_formatter_config(output: OutputConfig, options: OutputOptions) -> tuple[str, dict[str, Any]]:
    """Translate config defaults and CLI flags into a formatter request.

    Args:
        output: ``output`` config section.
        options: Parsed output flags.

    Returns:
        Tuple of (format identifier, formatter config). Keys that do not
        apply to the chosen format are dropped later by the factory.

    Raises:
        ValidationError: If the flag combination is invalid.
    """
    format_type = (options.format or output.format).lower()
    check_format_options(format_type, options)

    config: dict[str, Any] = {
        "use_colors": output.use_colors and not options.no_color,
        "pretty": options.pretty or None,
        "compact": options.compact or None,
        "indent": options.indent,
        "sort_keys": options.sort_keys or None,
        "detailed": bool(options.detailed) or output.detailed,
        "date_format": options.date_format or output.date_format,
        "timezone": options.timezone or output.timezone,
        "indent_size": output.indent_size,
        "show_comments": options.show_comments or None,
    }
    log.debug("Formatter request format=%s config=%s", format_type, config)
    return format_type, config
