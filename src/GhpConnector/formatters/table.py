"""Tabular formatters: aligned text table and CSV.

Both formatters share column selection. Rows are the mappings of a list (a
single mapping is one row); each cell is flattened to a short string. The
table itself is laid out by `tabulate`.
"""

from __future__ import annotations

import csv
import io
from typing import Any, Final, Mapping, Sequence

from tabulate import tabulate

from GhpConnector.formatters.base import CSV, TABLE, FormatType, OptionsFormatter
from GhpConnector.formatters.colors import colorize
from GhpConnector.formatters.config import default_config
from GhpConnector.formatters.entities import EntityKind, classify

ISSUE_COLUMNS: Final[tuple[str, ...]] = ("number", "state", "title", "assignees", "labels")

EMPTY_TABLE = "No items."
CIRCULAR_MARKER = "[Circular]"

_TABLE_FORMAT = "simple"
# tabulate pads every header by two spaces and joins columns with two spaces
_HEADER_PADDING = 2
_COLUMN_GAP = "  "
_MIN_COLUMN_WIDTH = 4


def table_rows(data: Any) -> list[Mapping[str, Any]]:
    """Normalize input into a list of row mappings.

    Scalars become ``{"value": item}`` rows.
    """
    if data is None:
        return []
    items = list(data) if isinstance(data, (list, tuple)) else [data]
    return [item if isinstance(item, Mapping) else {"value": item} for item in items]


def select_columns(rows: Sequence[Mapping[str, Any]], configured: Sequence[str] = ()) -> tuple[str, ...]:
    """Return the columns to render.

    Args:
        rows: Normalized rows.
        configured: Explicit column list, used as-is when non-empty.

    Returns:
        ``configured`` when given; the issue columns for issue lists;
        otherwise the scalar keys of the first row.
    """
    if configured:
        return tuple(configured)
    if not rows:
        return ()
    first = rows[0]
    if classify(first) is EntityKind.ISSUE:
        return ISSUE_COLUMNS
    return tuple(
        str(key) for key, value in first.items()
        if not isinstance(value, (Mapping, list, tuple))
    )


def cell_text(value: Any) -> str:
    """Flatten one cell value to a single line.

    Mappings show their first present ``login``, ``name``, ``title`` or
    ``id``; lists are joined with ``", "``. A list that contains itself
    shows ``[Circular]`` at the point of re-entry.
    """
    return _cell(value, set())


def _cell(value: Any, ancestors: set[int]) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        for key in ("login", "name", "title", "id"):
            if value.get(key) is not None:
                return str(value[key])
        return ""
    if isinstance(value, (list, tuple)):
        marker = id(value)
        if marker in ancestors:
            return CIRCULAR_MARKER
        ancestors.add(marker)
        try:
            return ", ".join(filter(None, (_cell(item, ancestors) for item in value)))
        finally:
            ancestors.discard(marker)
    return str(value).replace("\r", " ").replace("\n", " ")


class TableFormatter(OptionsFormatter):
    """Render a list of mappings as an aligned text table.

    Options:
        columns: Keys to show; defaults depend on the data.
        headers: Column titles, by position; missing titles fall back to the
            upper-cased column key.
        alignment: Mapping of column key to ``left``, ``right`` or ``center``.
        max_width: The widest columns wrap onto extra lines until a row
            fits.
        use_colors: Color the header row.
    """

    DEFAULT_OPTIONS = default_config(TABLE)

    def __init__(self, format_type: FormatType = TABLE, **options: Any) -> None:
        super().__init__(format_type, **options)

    def _titles(self, columns: Sequence[str], *, upper: bool) -> list[str]:
        headers = list(self.options.get("headers") or ())
        titles = []
        for idx, column in enumerate(columns):
            if idx < len(headers):
                titles.append(headers[idx])
            else:
                titles.append(column.replace("_", " ").upper() if upper else column)
        return titles

    def format(self, data: Any) -> str:  # noqa: A003
        rows = table_rows(data)
        if not rows:
            return EMPTY_TABLE
        columns = select_columns(rows, self.options.get("columns") or ())
        if not columns:
            return EMPTY_TABLE

        titles = self._titles(columns, upper=True)
        body = [[cell_text(row.get(column)) for column in columns] for row in rows]
        alignment = self.options.get("alignment") or {}

        rendered = tabulate(
            body,
            headers=titles,
            tablefmt=_TABLE_FORMAT,
            colalign=[alignment.get(column, "left") for column in columns],
            maxcolwidths=_column_limits(titles, body, int(self.options.get("max_width", 80))),
            disable_numparse=True,
        )
        lines = [line.rstrip() for line in rendered.split("\n")]
        lines[0] = colorize(lines[0], "header", bool(self.options.get("use_colors")))
        return "\n".join(lines)


class CsvFormatter(TableFormatter):
    """Render a list of mappings as CSV with a header row.

    Fields containing commas, quotes or line breaks are quoted and embedded
    quotes are doubled. Lines end with ``\\n``.
    """

    def __init__(self, **options: Any) -> None:
        super().__init__(CSV, **options)

    def format(self, data: Any) -> str:  # noqa: A003
        rows = table_rows(data)
        columns = select_columns(rows, self.options.get("columns") or ())
        if not columns:
            return ""

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(self._titles(columns, upper=False))
        for row in rows:
            writer.writerow([_csv_cell(row.get(column)) for column in columns])
        return buffer.getvalue().rstrip("\n")


def _csv_cell(value: Any) -> str:
    if isinstance(value, str):
        return value
    return cell_text(value)


def _column_limits(titles: Sequence[str], body: Sequence[Sequence[str]], max_width: int) -> list[int | None]:
    """Return per-column wrap widths for ``tabulate``.

    The widest columns are narrowed one character at a time until a row
    fits ``max_width`` or every column is down to the minimum. Columns that
    keep their natural width get ``None`` (no wrapping).
    """
    natural = [
        max(len(title) + _HEADER_PADDING, *(len(cells[idx]) for cells in body))
        for idx, title in enumerate(titles)
    ]
    limits = list(natural)
    budget = max_width - len(_COLUMN_GAP) * (len(limits) - 1)
    while sum(limits) > budget:
        widest = max(range(len(limits)), key=limits.__getitem__)
        if limits[widest] <= _MIN_COLUMN_WIDTH:
            break
        limits[widest] -= 1
    return [limit if limit < width else None for limit, width in zip(limits, natural)]
