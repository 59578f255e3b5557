"""Validated issue requests passed from the CLI to the GitHub client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from dateutil import parser as date_parser

from GhpConnector.errors import ValidationError

ALLOWED_STATES = {"open", "closed", "all"}
ALLOWED_UPDATE_STATES = {"open", "closed"}
ALLOWED_SORTS = {"created", "updated", "comments"}
ALLOWED_DIRECTIONS = {"asc", "desc"}
MAX_LIMIT = 100


def parse_csv_list(value: str | Sequence[str] | None) -> tuple[str, ...] | None:
    """Split a comma separated option into trimmed, non-empty items.

    Args:
        value: Raw option value, an already split sequence, or None.

    Returns:
        Tuple of items, or None when ``value`` is None. An empty string gives
        an empty tuple (used to clear labels or assignees).
    """
    if value is None:
        return None
    parts = value.split(",") if isinstance(value, str) else value
    return tuple(item.strip() for item in parts if item and item.strip())


@dataclass(frozen=True, slots=True)
class IssueQuery:
    """Filters for listing repository issues.

    Attributes:
        state: ``open``, ``closed`` or ``all``.
        limit: Page size, 1 to 100.
        sort: ``created``, ``updated`` or ``comments``.
        direction: ``asc`` or ``desc``.
        assignee: Login, ``none`` or ``*``.
        labels: Label names; issues must carry all of them.
        milestone: Milestone number, ``none`` or ``*``.
        creator: Login of the issue author.
        mentioned: Login mentioned in the issue.
        since: ISO-8601 timestamp; only issues updated at or after it.
    """

    state: str = "open"
    limit: int = 10
    sort: str = "created"
    direction: str = "desc"
    assignee: str | None = None
    labels: tuple[str, ...] = ()
    milestone: str | None = None
    creator: str | None = None
    mentioned: str | None = None
    since: str | None = None

    def check(self) -> None:
        """Validate the filters.

        Raises:
            ValidationError: If a filter has an unsupported value.
        """
        _check_choice(self.state, ALLOWED_STATES, "state")
        _check_choice(self.sort, ALLOWED_SORTS, "sort")
        _check_choice(self.direction, ALLOWED_DIRECTIONS, "direction")
        if not 1 <= self.limit <= MAX_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}, got {self.limit}")
        if self.since is not None:
            try:
                date_parser.isoparse(self.since)
            except ValueError as e:
                raise ValidationError(f"since must be an ISO 8601 timestamp, got {self.since!r}") from e

    def to_params(self) -> dict[str, Any]:
        """Return GitHub REST query parameters for this query."""
        params: dict[str, Any] = {
            "state": self.state,
            "per_page": self.limit,
            "sort": self.sort,
            "direction": self.direction,
        }
        optional = {
            "assignee": self.assignee,
            "labels": ",".join(self.labels) if self.labels else None,
            "milestone": self.milestone,
            "creator": self.creator,
            "mentioned": self.mentioned,
            "since": self.since,
        }
        params.update({key: value for key, value in optional.items() if value})
        return params


@dataclass(frozen=True, slots=True)
class IssueDraft:
    """Payload for creating an issue."""

    title: str
    body: str | None = None
    assignees: tuple[str, ...] | None = None
    labels: tuple[str, ...] | None = None

    def check(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("title must not be empty")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title.strip()}
        if self.body is not None:
            payload["body"] = self.body
        if self.assignees is not None:
            payload["assignees"] = list(self.assignees)
        if self.labels is not None:
            payload["labels"] = list(self.labels)
        return payload


@dataclass(frozen=True, slots=True)
class IssueUpdate:
    """Partial update of an existing issue.

    Fields left as None are not sent. Empty tuples clear the assignees or
    labels.
    """

    title: str | None = None
    body: str | None = None
    state: str | None = None
    assignees: tuple[str, ...] | None = None
    labels: tuple[str, ...] | None = None

    def check(self) -> None:
        """Validate the update.

        Raises:
            ValidationError: If nothing would change, the title is blank, or
                the state is not ``open``/``closed``.
        """
        if not self.to_payload():
            raise ValidationError("at least one field must be provided to update an issue")
        if self.title is not None and not self.title.strip():
            raise ValidationError("title must not be empty")
        if self.state is not None:
            _check_choice(self.state, ALLOWED_UPDATE_STATES, "state")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.title is not None:
            payload["title"] = self.title.strip()
        if self.body is not None:
            payload["body"] = self.body
        if self.state is not None:
            payload["state"] = self.state
        if self.assignees is not None:
            payload["assignees"] = list(self.assignees)
        if self.labels is not None:
            payload["labels"] = list(self.labels)
        return payload


def _check_choice(value: str, allowed: set[str], name: str) -> None:
    if value not in allowed:
        raise ValidationError(f"{name} must be one of {sorted(allowed)}, got {value!r}")
