"""Base classes for output formatters.

A formatter turns an already-fetched, JSON-like value into a string for one
or more format identifiers. Runtime configuration is an optional capability:
formatters that accept it also implement `Configurable`, and those that can
be copied before configuration implement `Cloneable`. The factory checks for
these capabilities with ``isinstance`` instead of probing for methods.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Final, Mapping, TypeVar

FormatType = str

JSON: Final = "json"
TEXT: Final = "text"
HUMAN: Final = "human"
TABLE: Final = "table"
MINIMAL: Final = "minimal"
CSV: Final = "csv"

KNOWN_FORMATS: Final[tuple[FormatType, ...]] = (JSON, TEXT, HUMAN, TABLE, MINIMAL, CSV)

_CloneT = TypeVar("_CloneT", bound="Cloneable")


class Formatter(ABC):
    """Abstract base class every formatter implements."""

    @abstractmethod
    def format(self, data: Any) -> str:  # noqa: A003 - mirrors str.format naming
        """Render data into a string.

        Args:
            data: JSON-like value (mapping, sequence, primitive or None).

        Returns:
            Rendered output.
        """

    def supports(self, data: Any) -> bool:
        """Return whether this formatter can render ``data``.

        The default accepts everything.
        """
        del data
        return True

    @abstractmethod
    def supported_formats(self) -> tuple[FormatType, ...]:
        """Return the format identifiers served by this formatter."""


class Configurable(ABC):
    """Capability: the formatter accepts runtime configuration."""

    @abstractmethod
    def configure(self, config: Mapping[str, Any]) -> None:
        """Shallow-merge ``config`` into the formatter options."""


class Cloneable(ABC):
    """Capability: the formatter can produce an independent copy of itself."""

    @abstractmethod
    def clone(self: _CloneT) -> _CloneT:
        """Return a new instance with a copy of the current options."""


class BaseFormatter(Formatter):
    """Formatter bound to a single format identifier."""

    def __init__(self, format_type: FormatType) -> None:
        self.format_type = format_type

    def supported_formats(self) -> tuple[FormatType, ...]:
        return (self.format_type,)


class OptionsFormatter(BaseFormatter, Configurable, Cloneable):
    """Formatter that keeps its options in a plain dict.

    Subclasses declare ``DEFAULT_OPTIONS``; constructor keyword arguments and
    later ``configure`` calls are shallow-merged on top of them.
    """

    DEFAULT_OPTIONS: Mapping[str, Any] = {}

    def __init__(self, format_type: FormatType, **options: Any) -> None:
        super().__init__(format_type)
        self.options: dict[str, Any] = copy.deepcopy(dict(self.DEFAULT_OPTIONS))
        self.configure(options)

    def configure(self, config: Mapping[str, Any]) -> None:
        self.options.update({key: value for key, value in config.items() if value is not None})

    def clone(self):
        twin = copy.copy(self)
        twin.options = copy.deepcopy(self.options)
        return twin
