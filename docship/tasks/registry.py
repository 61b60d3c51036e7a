"""Task registry and sequential pipeline runner.

Tasks are zero-argument callables registered under a unique name. Pipelines
are ordered lists of names that may refer to tasks or to other pipelines:

    registry = TaskRegistry(console)
    registry.add_task("clean", lambda: clean(ctx))
    registry.add_task("build", lambda: build(ctx))
    registry.add_pipeline("dev", ("clean", "build"))

    match registry.run("dev"):
        case Ok(run):
            ...
        case Err(PipelineFailure(task=task, error=error)):
            ...

A pipeline is expanded to its flat task list before anything runs, so an
unknown name or a cycle is reported without side effects. Tasks then run one
at a time; the first failure stops the run.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from docship.core.result import Err, Ok, Result
from docship.core.task_errors import TaskError
from docship.output.console import ConsoleProtocol

__all__ = [
    "PipelineError",
    "PipelineFailure",
    "PipelineRun",
    "TaskFn",
    "TaskRegistry",
]

TaskFn = Callable[[], Result[None, TaskError]]


@dataclass(frozen=True, slots=True)
class PipelineError:
    """The target cannot be expanded into tasks."""

    kind: Literal["unknown_target", "cycle"]
    message: str


@dataclass(frozen=True, slots=True)
class PipelineRun:
    target: str
    completed: tuple[str, ...]
    elapsed_seconds: float


@dataclass(frozen=True, slots=True)
class PipelineFailure:
    """A task failed; ``completed`` lists the tasks that ran before it."""

    target: str
    task: str
    error: TaskError
    completed: tuple[str, ...]


class TaskRegistry:
    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console
        self._tasks: dict[str, TaskFn] = {}
        self._pipelines: dict[str, tuple[str, ...]] = {}

    def _ensure_new(self, name: str) -> None:
        if not name:
            raise ValueError("target name cannot be empty")
        if name in self._tasks or name in self._pipelines:
            raise ValueError(f"duplicate target: {name}")

    def add_task(self, name: str, fn: TaskFn) -> None:
        self._ensure_new(name)
        self._tasks[name] = fn

    def add_pipeline(self, name: str, steps: Sequence[str]) -> None:
        self._ensure_new(name)
        if not steps:
            raise ValueError(f"pipeline has no steps: {name}")
        self._pipelines[name] = tuple(steps)

    def names(self) -> list[str]:
        return [*self._tasks, *self._pipelines]

    def expand(self, name: str) -> Result[tuple[str, ...], PipelineError]:
        """Resolve a target into the ordered tasks it runs."""
        out: list[str] = []
        error = self._expand_into(name, out, ())
        if error is not None:
            return Err(error)
        return Ok(tuple(out))

    def _expand_into(
        self, name: str, out: list[str], stack: tuple[str, ...]
    ) -> PipelineError | None:
        if name in stack:
            chain = " -> ".join((*stack, name))
            return PipelineError(kind="cycle", message=f"pipeline cycle: {chain}")
        if name in self._tasks:
            out.append(name)
            return None
        steps = self._pipelines.get(name)
        if steps is None:
            return PipelineError(kind="unknown_target", message=f"unknown target: {name}")
        for step in steps:
            error = self._expand_into(step, out, (*stack, name))
            if error is not None:
                return error
        return None

    def run(self, name: str) -> Result[PipelineRun, PipelineFailure | PipelineError]:
        """Run a task or pipeline, stopping at the first failing task."""
        expanded = self.expand(name)
        if isinstance(expanded, Err):
            return expanded

        started = time.monotonic()
        completed: list[str] = []
        for task in expanded.value:
            self._console.header(f"[{task}]")
            task_started = time.monotonic()
            result = self._tasks[task]()
            if isinstance(result, Err):
                return Err(
                    PipelineFailure(
                        target=name,
                        task=task,
                        error=result.error,
                        completed=tuple(completed),
                    )
                )
            completed.append(task)
            self._console.success(f"{task} ({time.monotonic() - task_started:.1f}s)")

        return Ok(
            PipelineRun(
                target=name,
                completed=tuple(completed),
                elapsed_seconds=time.monotonic() - started,
            )
        )
