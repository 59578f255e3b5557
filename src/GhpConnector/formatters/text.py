"""Human-readable text formatters.

`TextFormatter` walks arbitrary nested data. Mappings shaped like GitHub
entities (see `entities.classify`) use the dedicated entity renderers,
everything else falls back to ``key: value`` lines and numbered lists.
Containers that re-enter one of their ancestors render as ``[Circular]``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from GhpConnector.formatters.base import HUMAN, TEXT, FormatType, OptionsFormatter
from GhpConnector.formatters.colors import colorize
from GhpConnector.formatters.config import default_config
from GhpConnector.formatters.dates import format_date
from GhpConnector.formatters.entities import ENTITY_RENDERERS, EntityKind, TextStyle, classify, list_header

EMPTY_LIST = "No items."
CIRCULAR_MARKER = "[Circular]"

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class TextFormatter(OptionsFormatter):
    """Render data as indented, optionally colored text.

    Options:
        use_colors: Emit ANSI colors through `colorize`.
        detailed: Include bodies and extended entity fields, and expand
            nested lists inside generic objects.
        date_format: ``ISO``, ``local`` or ``relative``.
        timezone: ``"local"`` or an IANA zone name.
        indent_size: Spaces per nesting level.
        show_comments: Render ``comments_data`` attached to issues.
    """

    DEFAULT_OPTIONS = default_config(TEXT)

    def __init__(self, format_type: FormatType = TEXT, **options: Any) -> None:
        super().__init__(format_type, **options)

    def format(self, data: Any) -> str:  # noqa: A003
        style = TextStyle.from_options(self.options)
        return self._render(data, style, set())

    def _render(self, value: Any, style: TextStyle, ancestors: set[int]) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, (datetime, date)):
            return format_date(value.isoformat(), style.date_format, style.timezone)

        if isinstance(value, (Mapping, *_SEQUENCE_TYPES)):
            marker = id(value)
            if marker in ancestors:
                return CIRCULAR_MARKER
            ancestors.add(marker)
            try:
                if isinstance(value, Mapping):
                    return self._render_mapping(value, style, ancestors)
                return self._render_list(list(value), style, ancestors)
            finally:
                ancestors.discard(marker)

        return str(value)

    def _render_mapping(self, obj: Mapping[str, Any], style: TextStyle, ancestors: set[int]) -> str:
        kind = classify(obj)
        if kind is not EntityKind.GENERIC:
            return ENTITY_RENDERERS[kind](obj, style)

        pad = " " * style.indent_size
        lines: list[str] = []
        for key, value in obj.items():
            if value is None:
                continue
            label = colorize(f"{key}:", "key", style.use_colors)

            if isinstance(value, _SEQUENCE_TYPES) and not style.detailed:
                inline = ", ".join(self._render_inline(item, style, ancestors) for item in value)
                lines.append(f"{label} {inline}".rstrip())
                continue

            rendered = self._render(value, style, ancestors)
            if "\n" in rendered:
                lines.append(label)
                lines.append(_indent_lines(rendered, pad))
            else:
                lines.append(f"{label} {rendered}".rstrip())
        return "\n".join(lines)

    def _render_list(self, items: list[Any], style: TextStyle, ancestors: set[int]) -> str:
        if not items:
            return EMPTY_LIST

        kind = classify(items[0])
        if kind is not EntityKind.GENERIC:
            renderer = ENTITY_RENDERERS[kind]
            pad = " " * style.indent_size
            blocks = [colorize(list_header(kind, len(items)), "header", style.use_colors)]
            for item in items:
                if isinstance(item, Mapping):
                    blocks.append(renderer(item, style, style.indent_size))
                else:
                    blocks.append(_indent_lines(self._render(item, style, ancestors), pad))
            return "\n\n".join(blocks)

        return "\n\n".join(
            f"{idx}. {self._render(item, style, ancestors)}" for idx, item in enumerate(items, start=1)
        )

    def _render_inline(self, item: Any, style: TextStyle, ancestors: set[int]) -> str:
        """Render a list element on a single line."""
        rendered = self._render(item, style, ancestors)
        if "\n" not in rendered:
            return rendered
        parts = [line.strip() for line in rendered.split("\n") if line.strip()]
        return "{" + ", ".join(parts) + "}"


class HumanFormatter(TextFormatter):
    """Text formatter registered under ``human``."""

    def __init__(self, **options: Any) -> None:
        super().__init__(HUMAN, **options)


def _indent_lines(text: str, pad: str) -> str:
    return "\n".join(f"{pad}{line}" if line else line for line in text.split("\n"))
