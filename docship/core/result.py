"""Result type for explicit error handling.

Every fallible step in docship (loading config, checking a required value,
running a process, calling the GitHub API) returns ``Ok(value)`` or
``Err(error)`` instead of raising. Callers branch on the variant:

    result = load_config(path)
    if isinstance(result, Err):
        console.error(result.error.message)
        return
    config = result.value

Or with pattern matching:

    match run_silent(["dotnet", "test"], cwd=e2e_home):
        case Ok(_):
            console.success("tests passed")
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
