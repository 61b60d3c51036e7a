from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AdapterKind = Literal["process", "network", "io", "release_note"]


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """A value a task needs is missing or empty.

    Raised (returned) before the task touches anything.
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.field})"


@dataclass(frozen=True, slots=True)
class AdapterError:
    """An external tool, HTTP call or filesystem operation failed."""

    step: str
    message: str
    kind: AdapterKind = "process"
    detail: str | None = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


TaskError = ConfigurationError | AdapterError
