"""JSON output formatter.

Serializes JSON-like data with configurable indentation, key ordering and
compactness. Input is first normalized by `prepare_json`, which makes any
nested value safe for the encoder: reference cycles become ``"[Circular]"``
and non-finite floats become ``null``.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime
from typing import Any, Mapping

from GhpConnector.formatters.base import JSON, OptionsFormatter
from GhpConnector.formatters.config import default_config
from GhpConnector.utils.log import log

CIRCULAR_MARKER = "[Circular]"

_COMPACT_SEPARATORS = (",", ":")


def prepare_json(value: Any, *, sort_keys: bool = False) -> Any:
    """Return a copy of ``value`` that `json.dumps` can always encode.

    Args:
        value: Arbitrary JSON-like value, possibly with reference cycles.
        sort_keys: Whether mapping keys are sorted at every depth.

    Returns:
        Plain dicts, lists and primitives. A container that re-enters one of
        its own ancestors is replaced by ``"[Circular]"``; a container shared
        by two siblings is copied in full both times. Keys are converted
        with `str`; when two keys convert to the same text the first one
        wins.
    """
    return _prepare(value, sort_keys, set())


def _prepare(value: Any, sort_keys: bool, ancestors: set[int]) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, Mapping):
        marker = id(value)
        if marker in ancestors:
            return CIRCULAR_MARKER
        ancestors.add(marker)
        try:
            out: dict[str, Any] = {}
            for key, item in value.items():
                text = str(key)
                if text in out:
                    log.debug("Dropping duplicate JSON key %r", key)
                    continue
                out[text] = _prepare(item, sort_keys, ancestors)
            if sort_keys:
                return dict(sorted(out.items()))
            return out
        finally:
            ancestors.discard(marker)

    if isinstance(value, (list, tuple, set, frozenset)):
        marker = id(value)
        if marker in ancestors:
            return CIRCULAR_MARKER
        ancestors.add(marker)
        try:
            return [_prepare(item, sort_keys, ancestors) for item in value]
        finally:
            ancestors.discard(marker)

    return str(value)


class JsonFormatter(OptionsFormatter):
    """Render data as JSON text.

    Options:
        indent: Spaces per level when pretty printing.
        pretty: Whether to indent at all.
        compact: Single line with no whitespace; wins over ``pretty``.
        sort_keys: Sort object keys at every nesting level.
    """

    DEFAULT_OPTIONS = default_config(JSON)

    def __init__(self, **options: Any) -> None:
        super().__init__(JSON, **options)

    def format(self, data: Any) -> str:  # noqa: A003
        prepared = prepare_json(data, sort_keys=bool(self.options.get("sort_keys")))
        if self.options.get("compact"):
            return json.dumps(prepared, ensure_ascii=False, allow_nan=False, separators=_COMPACT_SEPARATORS)
        if self.options.get("pretty"):
            return json.dumps(prepared, ensure_ascii=False, allow_nan=False, indent=self.options.get("indent", 2))
        return json.dumps(prepared, ensure_ascii=False, allow_nan=False, separators=_COMPACT_SEPARATORS)
