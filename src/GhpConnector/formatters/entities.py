"""GitHub entity classification and renderers for text output.

`classify` sniffs the shape of a plain mapping once and the text formatter
dispatches on the resulting `EntityKind`. The renderers below produce one
block of lines per entity, every line prefixed by ``indent`` spaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from GhpConnector.formatters.colors import colorize, format_status
from GhpConnector.formatters.dates import format_date


class EntityKind(Enum):
    ISSUE = "issue"
    PULL_REQUEST = "pull_request"
    REPOSITORY = "repository"
    USER = "user"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Rendering options shared by the text renderers."""

    use_colors: bool = True
    detailed: bool = False
    date_format: str = "local"
    timezone: str = "local"
    indent_size: int = 2
    show_comments: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "TextStyle":
        defaults = cls()
        return cls(
            use_colors=bool(options.get("use_colors", defaults.use_colors)),
            detailed=bool(options.get("detailed", defaults.detailed)),
            date_format=options.get("date_format", defaults.date_format),
            timezone=options.get("timezone", defaults.timezone),
            indent_size=int(options.get("indent_size", defaults.indent_size)),
            show_comments=bool(options.get("show_comments", defaults.show_comments)),
        )


def classify(data: Any) -> EntityKind:
    """Classify a value by its shape.

    Rules are checked in priority order: issue, pull request, repository,
    user. A pull request also has ``number``/``title``/``state``, so the
    issue rule excludes values carrying both ``head`` and ``base``.

    Args:
        data: Any value. Non-mappings are always ``GENERIC``.

    Returns:
        The detected entity kind.
    """
    if not isinstance(data, Mapping):
        return EntityKind.GENERIC

    has = data.__contains__
    if has("number") and has("title") and has("state") and not (has("head") and has("base")):
        return EntityKind.ISSUE
    if has("number") and has("title") and has("head") and has("base"):
        return EntityKind.PULL_REQUEST
    if has("html_url") and (has("full_name") or (has("name") and has("owner"))):
        return EntityKind.REPOSITORY
    if has("login") and has("html_url") and not has("full_name") and not has("title"):
        return EntityKind.USER
    return EntityKind.GENERIC


def list_header(kind: EntityKind, count: int) -> str:
    """Return the ``Found N ...:`` header for a list of entities."""
    if kind is EntityKind.REPOSITORY:
        noun = "repository" if count == 1 else "repositories"
    else:
        singular = {
            EntityKind.ISSUE: "issue",
            EntityKind.PULL_REQUEST: "pull request",
            EntityKind.USER: "user",
        }[kind]
        noun = singular if count == 1 else f"{singular}s"
    return f"Found {count} {noun}:"


def format_issue(issue: Mapping[str, Any], style: TextStyle, indent: int = 0) -> str:
    """Render an issue.

    Fields are shown only when present. With ``style.detailed`` the body is
    appended under ``Description:``; with ``style.show_comments`` the
    comments attached under ``comments_data`` follow.
    """
    pad = " " * indent
    lines = [pad + colorize(f"#{issue.get('number')} {issue.get('title', '')}", "header", style.use_colors)]
    if issue.get("state"):
        lines.append(f"{pad}Status: {format_status(str(issue['state']), style.use_colors)}")
    if issue.get("html_url"):
        lines.append(f"{pad}URL: {colorize(str(issue['html_url']), 'url', style.use_colors)}")
    if issue.get("created_at"):
        lines.append(f"{pad}Created: {_date(issue['created_at'], style)}")
    if issue.get("updated_at"):
        lines.append(f"{pad}Last updated: {_date(issue['updated_at'], style)}")
    creator = _login(issue.get("user"))
    if creator:
        lines.append(f"{pad}Created by: {colorize(creator, 'value', style.use_colors)}")
    labels = ", ".join(_names(issue.get("labels"), "name"))
    if labels:
        lines.append(f"{pad}Labels: {colorize(labels, 'value', style.use_colors)}")
    assignees = ", ".join(_names(issue.get("assignees"), "login"))
    if assignees:
        lines.append(f"{pad}Assignees: {colorize(assignees, 'value', style.use_colors)}")
    milestone = issue.get("milestone")
    if isinstance(milestone, Mapping) and milestone.get("title"):
        lines.append(f"{pad}Milestone: {colorize(str(milestone['title']), 'value', style.use_colors)}")
    if issue.get("comments") is not None and not isinstance(issue.get("comments"), (list, tuple)):
        lines.append(f"{pad}Comments: {colorize(str(issue['comments']), 'value', style.use_colors)}")

    if style.detailed and issue.get("body"):
        lines.append("")
        lines.append(pad + colorize("Description:", "section", style.use_colors))
        lines.extend(f"{pad}{line}" for line in str(issue["body"]).split("\n"))

    raw_comments = issue.get("comments_data")
    comments = [c for c in raw_comments if isinstance(c, Mapping)] if isinstance(raw_comments, (list, tuple)) else []
    if style.show_comments and comments:
        lines.append("")
        lines.append(pad + colorize("Comments:", "section", style.use_colors))
        for idx, comment in enumerate(comments):
            if idx > 0:
                lines.append("")
            author = _login(comment.get("user")) or "unknown"
            when = format_date(comment.get("created_at"), style.date_format, style.timezone)
            lines.append(colorize(f"{pad}  {author} commented {when}:", "header2", style.use_colors))
            if comment.get("body"):
                lines.extend(f"{pad}    {line}" for line in str(comment["body"]).split("\n"))

    return "\n".join(lines)


def format_pull_request(pr: Mapping[str, Any], style: TextStyle, indent: int = 0) -> str:
    pad = " " * indent
    lines = [pad + colorize(f"PR #{pr.get('number')}: {pr.get('title', '')}", "header", style.use_colors)]
    if pr.get("state"):
        lines.append(f"{pad}Status: {format_status(str(pr['state']), style.use_colors)}")

    head, base = pr.get("head"), pr.get("base")
    if isinstance(head, Mapping) and isinstance(base, Mapping):
        branch = f"{head.get('ref', '?')} -> {base.get('ref', '?')}"
        lines.append(f"{pad}Branch: {colorize(branch, 'value', style.use_colors)}")

    if pr.get("created_at"):
        lines.append(f"{pad}Created: {_date(pr['created_at'], style)}")
    labels = ", ".join(_names(pr.get("labels"), "name"))
    if labels:
        lines.append(f"{pad}Labels: {colorize(labels, 'value', style.use_colors)}")

    if style.detailed and pr.get("body"):
        lines.append("")
        lines.extend(f"{pad}{line}" for line in str(pr["body"]).split("\n"))
    return "\n".join(lines)


def format_repository(repo: Mapping[str, Any], style: TextStyle, indent: int = 0) -> str:
    pad = " " * indent
    full_name = repo.get("full_name") or f"{_login(repo.get('owner')) or 'unknown'}/{repo.get('name') or 'unknown'}"
    lines = [pad + colorize(f"Repository: {full_name}", "header", style.use_colors)]

    if repo.get("description"):
        lines.append(f"{pad}Description: {repo['description']}")
    if repo.get("private") is not None:
        visibility = "private" if repo["private"] else "public"
        lines.append(f"{pad}Visibility: {format_status(visibility, style.use_colors)}")
    if repo.get("html_url"):
        lines.append(f"{pad}URL: {colorize(str(repo['html_url']), 'url', style.use_colors)}")

    if style.detailed:
        _optional_lines(
            lines,
            pad,
            repo,
            (
                ("language", "Language"),
                ("default_branch", "Default branch"),
                ("stargazers_count", "Stars"),
                ("forks_count", "Forks"),
                ("open_issues_count", "Open issues"),
            ),
        )
    return "\n".join(lines)


def format_user(user: Mapping[str, Any], style: TextStyle, indent: int = 0) -> str:
    pad = " " * indent
    name, login = user.get("name"), user.get("login")
    lines = [pad + colorize(f"User: {name or login or 'Unknown User'}", "header", style.use_colors)]

    if name and login and name != login:
        lines.append(f"{pad}Login: {login}")
    if user.get("html_url"):
        lines.append(f"{pad}URL: {colorize(str(user['html_url']), 'url', style.use_colors)}")

    if style.detailed:
        _optional_lines(
            lines,
            pad,
            user,
            (
                ("bio", "Bio"),
                ("company", "Company"),
                ("location", "Location"),
                ("email", "Email"),
                ("public_repos", "Public repositories"),
                ("followers", "Followers"),
            ),
        )
    return "\n".join(lines)


ENTITY_RENDERERS = {
    EntityKind.ISSUE: format_issue,
    EntityKind.PULL_REQUEST: format_pull_request,
    EntityKind.REPOSITORY: format_repository,
    EntityKind.USER: format_user,
}


def _optional_lines(
    lines: list[str],
    pad: str,
    entity: Mapping[str, Any],
    fields: Iterable[tuple[str, str]],
) -> None:
    for key, label in fields:
        value = entity.get(key)
        if value is not None and value != "":
            lines.append(f"{pad}{label}: {value}")


def _date(value: Any, style: TextStyle) -> str:
    return colorize(format_date(value, style.date_format, style.timezone), "date", style.use_colors)


def _login(user: Any) -> str | None:
    if isinstance(user, Mapping):
        login = user.get("login")
        return str(login) if login else None
    return None


def _names(items: Any, key: str) -> list[str]:
    """Extract display names from a list of mappings or plain strings."""
    if not isinstance(items, (list, tuple)):
        return []
    names: list[str] = []
    for item in items:
        if isinstance(item, Mapping):
            if item.get(key):
                names.append(str(item[key]))
        elif item is not None:
            names.append(str(item))
    return names
