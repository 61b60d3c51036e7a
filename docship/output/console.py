"""Console output abstraction.

Tasks and the pipeline runner report progress through ``ConsoleProtocol``
rather than printing. Production uses ``RichConsole``; tests use
``MockConsole`` and assert on the captured records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Tagged messages: (prefix, rich style). Both consoles use the same prefixes.
_TAGS: dict[Style, tuple[str, str]] = {
    Style.SUCCESS: ("OK", "green"),
    Style.ERROR: ("error:", "red bold"),
    Style.WARNING: ("warning:", "yellow"),
    Style.INFO: ("info:", "cyan"),
}

_RICH_STYLES: dict[Style, str] = {
    Style.DEFAULT: "",
    Style.DIM: "dim",
    Style.HEADER: "blue bold",
    **{style: rich_style for style, (_, rich_style) in _TAGS.items()},
}


class ConsoleProtocol(Protocol):
    """Styled, line-oriented output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None:
        """Announce a new section, e.g. the start of a task."""
        ...


class RichConsole:
    """Console backed by rich. Errors go to stderr; messages are never markup."""

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def _tagged(self, style: Style, message: str) -> None:
        from rich.text import Text

        prefix, rich_style = _TAGS[style]
        line = Text.assemble((prefix, rich_style), " ", message)
        (self._err if style is Style.ERROR else self._out).print(line)

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message)

    def header(self, message: str) -> None:
        from rich.text import Text

        self._out.rule(Text(message, style=_RICH_STYLES[Style.HEADER]), align="left")


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def _tagged(self, style: Style, message: str) -> None:
        prefix, _ = _TAGS[style]
        self.outputs.append(OutputRecord(f"{prefix} {message}", style))

    def success(self, message: str) -> None:
        self._tagged(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._tagged(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._tagged(Style.WARNING, message)

    def info(self, message: str) -> None:
        self._tagged(Style.INFO, message)

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
