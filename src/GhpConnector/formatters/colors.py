"""Terminal color scheme for text output.

Every color decision in the text formatters goes through `colorize`, which
maps a semantic key to a click style and is a no-op when colors are off.
"""

from __future__ import annotations

from typing import Final

import click

COLOR_SCHEME: Final[dict[str, str]] = {
    "header": "blue",
    "header2": "magenta",
    "key": "cyan",
    "value": "white",
    "date": "yellow",
    "url": "green",
    "section": "cyan",
    "status.success": "green",
    "status.warning": "yellow",
    "status.error": "red",
    "status.info": "blue",
}

_SUCCESS_STATES = {"open", "success", "active"}
_ERROR_STATES = {"closed", "error", "failure", "inactive"}
_WARNING_STATES = {"warning", "pending"}


def colorize(text: str, key: str, use_colors: bool = True) -> str:
    """Apply the color mapped to ``key``.

    Args:
        text: Text to style.
        key: Semantic color key such as ``header`` or ``status.error``.
        use_colors: When False the text is returned unchanged.

    Returns:
        Styled text, or ``text`` itself for unknown keys or disabled colors.
    """
    if not use_colors:
        return text
    color = COLOR_SCHEME.get(key)
    if color is None:
        return text
    return click.style(text, fg=color)


def status_color(status: str) -> str:
    """Return the status color key for a state string."""
    lowered = status.lower()
    if lowered in _SUCCESS_STATES:
        return "status.success"
    if lowered in _ERROR_STATES:
        return "status.error"
    if lowered in _WARNING_STATES:
        return "status.warning"
    return "status.info"


def format_status(status: str, use_colors: bool = True) -> str:
    return colorize(status, status_color(status), use_colors)
