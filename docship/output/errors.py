"""Error presentation utilities.

Centralized formatting and exit code mapping for task failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docship.core.errors import ErrorCode
from docship.core.task_errors import AdapterError, ConfigurationError, TaskError
from docship.output.console import Style

if TYPE_CHECKING:
    from docship.output.console import ConsoleProtocol

__all__ = ["print_task_error", "task_error_exit_code"]


def print_task_error(task: str, error: TaskError, console: ConsoleProtocol) -> None:
    """Print a task failure with its context."""
    match error:
        case ConfigurationError(field=field, message=message):
            console.error(f"{task}: {message}")
            console.print(f"missing: {field}", Style.DIM)
        case AdapterError(step=step, message=message, detail=detail):
            console.error(f"{task}: {message}")
            console.print(f"step: {step}", Style.DIM)
            if detail:
                console.print(detail.rstrip(), Style.DIM)


def task_error_exit_code(error: TaskError) -> int:
    """Get the process exit code for a task failure."""
    match error:
        case ConfigurationError():
            return int(ErrorCode.CONFIG_ERROR)
        case AdapterError(kind="network"):
            return int(ErrorCode.NETWORK_ERROR)
        case AdapterError(kind="io") | AdapterError(kind="release_note"):
            return int(ErrorCode.IO_ERROR)
        case AdapterError():
            return int(ErrorCode.BUILD_ERROR)
