"""Issue listing defaults."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from GhpConnector.config.common import (
    check_choice,
    expect_int,
    expect_str,
    get_optional_value,
    get_section,
)
from GhpConnector.core.query import ALLOWED_DIRECTIONS, ALLOWED_SORTS, ALLOWED_STATES, MAX_LIMIT
from GhpConnector.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class IssuesConfig:
    """Defaults applied to ``issue list`` when flags are omitted."""

    state: str
    limit: int
    sort: str
    direction: str


def load_issues(raw: Mapping[str, Any]) -> IssuesConfig:
    """Load issues domain config from raw mapping.

    Raises:
        ConfigurationError: If a value has the wrong type.
    """
    section = get_section(raw, "issues", required=False)
    return IssuesConfig(
        state=expect_str(get_optional_value(section, "state", "open"), "issues.state").lower(),
        limit=expect_int(get_optional_value(section, "limit", 10), "issues.limit"),
        sort=expect_str(get_optional_value(section, "sort", "created"), "issues.sort").lower(),
        direction=expect_str(get_optional_value(section, "direction", "desc"), "issues.direction").lower(),
    )


def check_issues(config: IssuesConfig) -> None:
    """Validate issues domain constraints.

    Raises:
        ConfigurationError: If values violate issues constraints.
    """
    check_choice(config.state, ALLOWED_STATES, "issues.state")
    check_choice(config.sort, ALLOWED_SORTS, "issues.sort")
    check_choice(config.direction, ALLOWED_DIRECTIONS, "issues.direction")
    if not 1 <= config.limit <= MAX_LIMIT:
        raise ConfigurationError(f"issues.limit must be between 1 and {MAX_LIMIT}")
