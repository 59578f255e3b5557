"""Minimal formatter for scripting: one identifier per line."""

from __future__ import annotations

from typing import Any, Mapping

from GhpConnector.formatters.base import MINIMAL, BaseFormatter

IDENTIFIER_KEYS = ("number", "id", "login", "name")


class MinimalFormatter(BaseFormatter):
    """Print only identifiers.

    Mappings render their first present key out of ``number``, ``id``,
    ``login`` and ``name`` (empty when none is present); lists render one
    line per element. This formatter takes no runtime configuration.
    """

    def __init__(self) -> None:
        super().__init__(MINIMAL)

    def format(self, data: Any) -> str:  # noqa: A003
        if isinstance(data, (list, tuple)):
            return "\n".join(_identifier(item) for item in data)
        return _identifier(data)


def _identifier(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Mapping):
        for key in IDENTIFIER_KEYS:
            if value.get(key) is not None:
                return str(value[key])
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
