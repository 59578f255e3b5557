"""Application config orchestration and layered loading entrypoints.

Layers, lowest to highest precedence:

1. Built-in defaults (`DEFAULT_CONFIG_YAML`).
2. The YAML config file, deep-merged when it exists.
3. Environment variables (``GITHUB_OWNER``, ``GITHUB_REPO``,
   ``GITHUB_TOKEN``, ``GITHUB_API_URL``).
4. Explicit overrides from CLI flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from GhpConnector.config.github import GitHubConfig, check_github, load_github
from GhpConnector.config.issues import IssuesConfig, check_issues, load_issues
from GhpConnector.config.output import OutputConfig, check_output, load_output
from GhpConnector.config.runtime import RuntimeConfig, check_runtime, load_runtime
from GhpConnector.errors import ConfigurationError
from GhpConnector.utils.log import log

DEFAULT_CONFIG_PATH = Path("config/ghp.yml")

DEFAULT_CONFIG_YAML = """\
# ghp configuration. Values here are overridden by GITHUB_* environment
# variables (a .env file is loaded automatically) and by CLI flags.

log:
  level: INFO
  to_file: false
  dir: log

github:
  owner: null
  repo: null
  # Prefer GITHUB_TOKEN in the environment over storing a token here.
  token: null
  base_url: https://api.github.com
  timeout: 30

output:
  # json | text | human | table | csv | minimal
  format: human
  use_colors: true
  # ISO | local | relative
  date_format: local
  timezone: local
  detailed: false
  indent_size: 2

issues:
  state: open
  limit: 10
  sort: created
  direction: desc
"""

ENV_KEYS: dict[str, tuple[str, str]] = {
    "GITHUB_OWNER": ("github", "owner"),
    "GITHUB_REPO": ("github", "repo"),
    "GITHUB_TOKEN": ("github", "token"),
    "GITHUB_API_URL": ("github", "base_url"),
}


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    github: GitHubConfig
    output: OutputConfig
    issues: IssuesConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    github = load_github(raw)
    output = load_output(raw)
    issues = load_issues(raw)

    check_runtime(runtime)
    check_github(github)
    check_output(output)
    check_issues(issues)

    return AppConfig(runtime=runtime, github=github, output=output, issues=issues)


def load_config(
    path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Load configuration from every layer.

    Args:
        path: YAML config file. A missing file is skipped.
        env: Environment mapping; defaults to ``os.environ``.
        overrides: Nested mapping of explicit values (CLI flags). ``None``
            leaves are skipped.

    Returns:
        Validated application configuration.

    Raises:
        ConfigurationError: If any layer holds an invalid value.
    """
    merged = parse_yaml(DEFAULT_CONFIG_YAML)

    if path is not None:
        if path.is_file():
            log.debug("Loading config file %s", path)
            merged = merge_config_dicts(merged, parse_yaml(path.read_text(encoding="utf-8")))
        else:
            log.debug("Config file %s not found, using defaults", path)

    merged = merge_config_dicts(merged, env_overrides(os.environ if env is None else env))
    if overrides:
        merged = merge_config_dicts(merged, _drop_none(overrides))
    return parse_config_dict(merged)


def env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Translate ``GITHUB_*`` environment variables into a config mapping."""
    out: dict[str, Any] = {}
    for name, (section, field) in ENV_KEYS.items():
        value = env.get(name)
        if value:
            out.setdefault(section, {})[field] = value
    return out


def init_config_file(path: Path, *, force: bool = False) -> Path:
    """Write the default configuration file.

    Args:
        path: Destination path; parent directories are created.
        force: Overwrite an existing file.

    Returns:
        The written path.

    Raises:
        ConfigurationError: If the file exists and ``force`` is False.
    """
    if path.exists() and not force:
        raise ConfigurationError(f"Config file already exists: {path} (use --force to overwrite)")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    log.info("Config written to %s", path)
    return path


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML config: {e}") from e
    if not isinstance(data, Mapping):
        raise ConfigurationError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _drop_none(raw: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, Mapping):
            nested = _drop_none(value)
            if nested:
                out[key] = nested
        elif value is not None:
            out[key] = value
    return out
