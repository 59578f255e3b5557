"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, NoReturn, Protocol

import click

from GhpConnector.cli.commands import OutputRenderer
from GhpConnector.cli.factories import (
    ClientFactory,
    FormatterFactoryBuilder,
    OutputOptions,
    build_formatter_config,
)
from GhpConnector.config import AppConfig, init_config_file
from GhpConnector.errors import ExitCode, GhpError
from GhpConnector.github import GitHubClient
from GhpConnector.utils.log import configure_logging, log


class Command(Protocol):
    def execute(self) -> str: ...


CommandBuilder = Callable[[GitHubClient, OutputRenderer], Command]


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    This is the only place that catches arbitrary exceptions: `GhpError`
    subclasses exit with their own code, anything else with the general
    error code.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def run_issue_command(self, action: str, options: OutputOptions, build: CommandBuilder) -> None:
        """Execute an issue command and print its output.

        Args:
            action: Command name used for the log file (e.g. ``issue-list``).
            options: Output flags for the formatter.
            build: Creates the command from a client and a renderer.

        Raises:
            click.exceptions.Exit: With the error's exit code on failure.
        """
        self._configure_logging(action)
        try:
            format_type, formatter_config = build_formatter_config(self.config.output, options)
            renderer = OutputRenderer(
                factory=FormatterFactoryBuilder.create_formatter_factory(),
                format_type=format_type,
                config=formatter_config,
            )
            with ClientFactory.create_client(self.config) as client:
                output = build(client, renderer).execute()
        except GhpError as e:
            _fail(action, e, e.exit_code)
        except Exception as e:  # noqa: BLE001 - cli boundary
            _fail(action, e, ExitCode.GENERAL_ERROR)
        click.echo(output)

    def run_config_init(self, path: Path, *, force: bool) -> None:
        """Write the default config file."""
        self._configure_logging("config-init")
        try:
            written = init_config_file(path, force=force)
        except GhpError as e:
            _fail("config-init", e, e.exit_code)
        click.echo(f"Wrote {written}")


def _fail(action: str, error: Exception, code: ExitCode) -> NoReturn:
    log.error("%s failed: %s", action, error)
    log.debug("%s traceback", action, exc_info=error)
    raise click.exceptions.Exit(int(code)) from error
