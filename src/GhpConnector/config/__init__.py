"""Public configuration API for GhpConnector."""

from __future__ import annotations

from GhpConnector.config.app import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_CONFIG_YAML,
    AppConfig,
    env_overrides,
    init_config_file,
    load_config,
    merge_config_dicts,
    parse_config_dict,
)
from GhpConnector.config.github import GitHubConfig
from GhpConnector.config.issues import IssuesConfig
from GhpConnector.config.output import OutputConfig
from GhpConnector.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "GitHubConfig",
    "OutputConfig",
    "IssuesConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG_YAML",
    "env_overrides",
    "init_config_file",
    "load_config",
    "merge_config_dicts",
    "parse_config_dict",
]
