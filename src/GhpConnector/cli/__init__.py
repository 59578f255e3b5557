"""CLI package for ghp command orchestration.

Contains the click interface, the command objects it builds, the runner
that executes them, and the component factories.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from GhpConnector.cli.runner import CommandRunner
from GhpConnector.cli.ui import cli


def main() -> None:
    """Run the ghp CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
