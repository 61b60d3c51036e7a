"""Precondition checks run at the top of every task.

A task lists the values it needs, in order, and stops at the first one that
is missing:

    checked = require_all(
        require(config.docfx.home, "config.docfx.home", "Can't find docfx home directory in configuration."),
        require(env.get("TOKEN"), "env.TOKEN", "No github account token in the environment."),
    )
    if isinstance(checked, Err):
        return checked
    home, token = checked.value
"""

from __future__ import annotations

from .result import Err, Ok, Result
from .task_errors import ConfigurationError

__all__ = ["require", "require_all"]


def require(value: str | None, name: str, message: str) -> Result[str, ConfigurationError]:
    """Fail if ``value`` is None, empty, or only whitespace."""
    if value is None or not value.strip():
        return Err(ConfigurationError(field=name, message=message))
    return Ok(value)


def require_all(
    *checks: Result[str, ConfigurationError],
) -> Result[list[str], ConfigurationError]:
    """Return the first failing check, or every checked value in order."""
    values: list[str] = []
    for check in checks:
        if isinstance(check, Err):
            return check
        values.append(check.value)
    return Ok(values)
