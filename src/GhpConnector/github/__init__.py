"""GitHub API access."""

from __future__ import annotations

from GhpConnector.github.client import GitHubClient

__all__ = ["GitHubClient"]
