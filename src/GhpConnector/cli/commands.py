"""Command implementations for the ghp CLI.

Encapsulates the issue workflows, separated from click parameter handling.
Each command calls the GitHub client and returns the rendered output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from GhpConnector.core.query import IssueDraft, IssueQuery, IssueUpdate
from GhpConnector.formatters import FormatterFactory
from GhpConnector.github import GitHubClient
from GhpConnector.utils.log import log


@dataclass(frozen=True, slots=True)
class OutputRenderer:
    """Renders command results with one format and configuration."""

    factory: FormatterFactory
    format_type: str
    config: Mapping[str, Any]

    def render(self, data: Any) -> str:
        return self.factory.format(data, self.format_type, self.config)


@dataclass(slots=True)
class IssueListCommand:
    """List repository issues matching a query.

    The issues endpoint also returns pull requests; those are left out.
    """

    client: GitHubClient
    renderer: OutputRenderer
    query: IssueQuery

    def execute(self) -> str:
        self.query.check()
        items = self.client.list_issues(self.query.to_params())
        issues = [item for item in items if "pull_request" not in item]
        log.debug("Fetched %d items, %d issues", len(items), len(issues))
        return self.renderer.render(issues)


@dataclass(slots=True)
class IssueGetCommand:
    """Fetch one issue, optionally with its comments attached."""

    client: GitHubClient
    renderer: OutputRenderer
    number: int
    with_comments: bool = False

    def execute(self) -> str:
        issue = self.client.get_issue(self.number)
        if self.with_comments:
            issue = dict(issue)
            issue["comments_data"] = self.client.list_issue_comments(self.number)
            log.debug("Fetched %d comments for issue #%d", len(issue["comments_data"]), self.number)
        return self.renderer.render(issue)


@dataclass(slots=True)
class IssueCreateCommand:
    client: GitHubClient
    renderer: OutputRenderer
    draft: IssueDraft

    def execute(self) -> str:
        self.draft.check()
        issue = self.client.create_issue(self.draft.to_payload())
        log.info("Created issue #%s", issue.get("number"))
        return self.renderer.render(issue)


@dataclass(slots=True)
class IssueUpdateCommand:
    client: GitHubClient
    renderer: OutputRenderer
    number: int
    update: IssueUpdate

    def execute(self) -> str:
        self.update.check()
        issue = self.client.update_issue(self.number, self.update.to_payload())
        log.info("Updated issue #%d", self.number)
        return self.renderer.render(issue)
