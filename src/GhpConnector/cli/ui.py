"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import click
from dotenv import load_dotenv

from GhpConnector import __version__
from GhpConnector.cli.commands import (
    IssueCreateCommand,
    IssueGetCommand,
    IssueListCommand,
    IssueUpdateCommand,
)
from GhpConnector.cli.factories import OutputOptions
from GhpConnector.cli.runner import CommandRunner
from GhpConnector.config import DEFAULT_CONFIG_PATH, load_config
from GhpConnector.core.query import (
    ALLOWED_DIRECTIONS,
    ALLOWED_SORTS,
    ALLOWED_STATES,
    ALLOWED_UPDATE_STATES,
    MAX_LIMIT,
    IssueDraft,
    IssueQuery,
    IssueUpdate,
    parse_csv_list,
)
from GhpConnector.errors import GhpError
from GhpConnector.formatters import KNOWN_FORMATS


def output_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared output flags to an issue command."""
    decorators = [
        click.option("-f", "--format", "output_format", type=click.Choice(KNOWN_FORMATS), default=None,
                     help="Output format (defaults to output.format in the config)."),
        click.option("--pretty", is_flag=True, default=False, help="Indent JSON output."),
        click.option("--compact", is_flag=True, default=False, help="Single-line JSON without spaces."),
        click.option("--indent", type=click.IntRange(min=0), default=None, help="JSON indent width (needs --pretty)."),
        click.option("--sort-keys", is_flag=True, default=False, help="Sort JSON object keys."),
        click.option("--no-color", is_flag=True, default=False, help="Disable colored text output."),
        click.option("--timezone", default=None, help='IANA timezone for dates, or "local".'),
        click.option("--date-format", type=click.Choice(["ISO", "local", "relative"], case_sensitive=False),
                     default=None, help="How dates are shown in text output."),
        click.option("--detailed", is_flag=True, default=False, help="Show bodies and extra fields."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _options(kwargs: dict[str, Any], *, show_comments: bool | None = None) -> OutputOptions:
    """Pop output flags from click kwargs into `OutputOptions`."""
    return OutputOptions(
        format=kwargs.pop("output_format"),
        pretty=kwargs.pop("pretty") or None,
        compact=kwargs.pop("compact") or None,
        indent=kwargs.pop("indent"),
        sort_keys=kwargs.pop("sort_keys") or None,
        no_color=kwargs.pop("no_color"),
        timezone=kwargs.pop("timezone"),
        date_format=kwargs.pop("date_format"),
        detailed=kwargs.pop("detailed") or None,
        show_comments=show_comments,
    )


@click.group(help="ghp: query and update GitHub issues from the terminal.")
@click.version_option(__version__, prog_name="ghp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (skipped when missing).",
)
@click.option("-o", "--owner", default=None, help="Repository owner.")
@click.option("-r", "--repo", default=None, help="Repository name.")
@click.option("--debug", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, owner: str | None, repo: str | None, debug: bool) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
        owner: Repository owner override.
        repo: Repository name override.
        debug: Force DEBUG logging.
    """
    if ctx.invoked_subcommand == "config":
        return

    load_dotenv()
    overrides = {
        "github": {"owner": owner, "repo": repo},
        "log": {"level": "DEBUG" if debug else None},
    }
    try:
        ctx.obj = load_config(config_path, overrides=overrides)
    except GhpError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(int(e.exit_code))


@cli.group("issue")
def issue_group() -> None:
    """Manage GitHub issues."""


@issue_group.command("list")
@click.option("-s", "--state", type=click.Choice(sorted(ALLOWED_STATES)), default=None, help="Issue state.")
@click.option("-l", "--limit", type=click.IntRange(1, MAX_LIMIT), default=None, help="Maximum number of issues.")
@click.option("-a", "--assignee", default=None, help='Filter by assignee login ("none" or "*" allowed).')
@click.option("-L", "--label", "labels", default=None, help="Filter by labels, comma-separated.")
@click.option("-S", "--sort", type=click.Choice(sorted(ALLOWED_SORTS)), default=None, help="Sort field.")
@click.option("-d", "--direction", type=click.Choice(sorted(ALLOWED_DIRECTIONS)), default=None, help="Sort direction.")
@click.option("-m", "--milestone", default=None, help='Milestone number, "none" or "*".')
@click.option("-c", "--creator", default=None, help="Filter by issue author.")
@click.option("-M", "--mentioned", default=None, help="Filter by mentioned user.")
@click.option("--since", default=None, help="Only issues updated at or after this ISO 8601 time.")
@output_options
@click.pass_context
def issue_list_cmd(ctx: click.Context, **kwargs: Any) -> None:
    """List issues of the repository."""
    cfg = ctx.find_root().obj
    options = _options(kwargs)
    query = IssueQuery(
        state=kwargs["state"] or cfg.issues.state,
        limit=kwargs["limit"] or cfg.issues.limit,
        sort=kwargs["sort"] or cfg.issues.sort,
        direction=kwargs["direction"] or cfg.issues.direction,
        assignee=kwargs["assignee"],
        labels=parse_csv_list(kwargs["labels"]) or (),
        milestone=kwargs["milestone"],
        creator=kwargs["creator"],
        mentioned=kwargs["mentioned"],
        since=kwargs["since"],
    )
    CommandRunner(cfg).run_issue_command(
        "issue-list",
        options,
        lambda client, renderer: IssueListCommand(client=client, renderer=renderer, query=query),
    )


@issue_group.command("get")
@click.argument("number", type=click.IntRange(min=1))
@click.option("--comments", is_flag=True, default=False, help="Include the issue comments.")
@output_options
@click.pass_context
def issue_get_cmd(ctx: click.Context, number: int, comments: bool, **kwargs: Any) -> None:
    """Show one issue."""
    cfg = ctx.find_root().obj
    options = _options(kwargs, show_comments=comments or None)
    CommandRunner(cfg).run_issue_command(
        "issue-get",
        options,
        lambda client, renderer: IssueGetCommand(
            client=client, renderer=renderer, number=number, with_comments=comments
        ),
    )


@issue_group.command("create")
@click.option("-t", "--title", required=True, help="Issue title.")
@click.option("-b", "--body", default=None, help="Issue body.")
@click.option("-a", "--assignees", default=None, help="Comma-separated assignee logins.")
@click.option("-L", "--labels", default=None, help="Comma-separated label names.")
@output_options
@click.pass_context
def issue_create_cmd(
    ctx: click.Context,
    title: str,
    body: str | None,
    assignees: str | None,
    labels: str | None,
    **kwargs: Any,
) -> None:
    """Create an issue."""
    cfg = ctx.find_root().obj
    draft = IssueDraft(
        title=title,
        body=body,
        assignees=parse_csv_list(assignees),
        labels=parse_csv_list(labels),
    )
    CommandRunner(cfg).run_issue_command(
        "issue-create",
        _options(kwargs),
        lambda client, renderer: IssueCreateCommand(client=client, renderer=renderer, draft=draft),
    )


@issue_group.command("update")
@click.argument("number", type=click.IntRange(min=1))
@click.option("-t", "--title", default=None, help="New title.")
@click.option("-b", "--body", default=None, help="New body.")
@click.option("-s", "--state", type=click.Choice(sorted(ALLOWED_UPDATE_STATES)), default=None, help="New state.")
@click.option("-a", "--assignees", default=None, help="Comma-separated assignee logins (empty to clear).")
@click.option("-L", "--labels", default=None, help="Comma-separated label names (empty to clear).")
@output_options
@click.pass_context
def issue_update_cmd(
    ctx: click.Context,
    number: int,
    title: str | None,
    body: str | None,
    state: str | None,
    assignees: str | None,
    labels: str | None,
    **kwargs: Any,
) -> None:
    """Update an issue. At least one field is required."""
    cfg = ctx.find_root().obj
    update = IssueUpdate(
        title=title,
        body=body,
        state=state,
        assignees=parse_csv_list(assignees),
        labels=parse_csv_list(labels),
    )
    CommandRunner(cfg).run_issue_command(
        "issue-update",
        _options(kwargs),
        lambda client, renderer: IssueUpdateCommand(
            client=client, renderer=renderer, number=number, update=update
        ),
    )


@cli.group("config")
def config_group() -> None:
    """Manage the configuration file."""


@config_group.command("init")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False), default=DEFAULT_CONFIG_PATH)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
def config_init_cmd(path: Path, force: bool) -> None:
    """Write a default config file to PATH."""
    runner = CommandRunner(load_config(None, env={}))
    runner.run_config_init(path, force=force)
