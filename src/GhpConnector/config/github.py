"""GitHub connection configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from GhpConnector.config.common import (
    expect_float,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_section,
)
from GhpConnector.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Repository coordinates and API access settings.

    ``owner`` and ``repo`` may be unset here; commands that talk to a
    repository check them when the client is built.
    """

    owner: str | None
    repo: str | None
    token: str | None
    base_url: str
    timeout: float


def load_github(raw: Mapping[str, Any]) -> GitHubConfig:
    """Load github domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed GitHub configuration.

    Raises:
        ConfigurationError: If a value has the wrong type.
    """
    section = get_section(raw, "github", required=False)
    return GitHubConfig(
        owner=expect_optional_str(get_optional_value(section, "owner", None), "github.owner"),
        repo=expect_optional_str(get_optional_value(section, "repo", None), "github.repo"),
        token=expect_optional_str(get_optional_value(section, "token", None), "github.token"),
        base_url=expect_str(get_optional_value(section, "base_url", DEFAULT_BASE_URL), "github.base_url").rstrip("/"),
        timeout=expect_float(get_optional_value(section, "timeout", 30), "github.timeout"),
    )


def check_github(config: GitHubConfig) -> None:
    """Validate github domain constraints.

    Raises:
        ConfigurationError: If values violate github constraints.
    """
    if not config.base_url.startswith(("http://", "https://")):
        raise ConfigurationError("github.base_url must be an http(s) URL")
    if config.timeout <= 0:
        raise ConfigurationError("github.timeout must be > 0")
    if config.owner and "/" in config.owner:
        raise ConfigurationError("github.owner must not contain '/'")
    if config.repo and "/" in config.repo:
        raise ConfigurationError("github.repo must not contain '/'")
