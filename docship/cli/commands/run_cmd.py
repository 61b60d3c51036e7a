"""Run command - execute a task or pipeline."""

from __future__ import annotations

import typer

from docship.cli.context import build_context
from docship.core.errors import ErrorCode
from docship.core.result import Err
from docship.output.console import Style
from docship.output.errors import print_task_error, task_error_exit_code
from docship.tasks.catalog import DEFAULT_TARGET, build_registry
from docship.tasks.context import TaskContext
from docship.tasks.registry import PipelineError


def run(
    target: str = typer.Argument(DEFAULT_TARGET, help="Task or pipeline to run"),
) -> None:
    """Run a task or pipeline (default: dev)."""
    ctx = build_context()
    console = ctx.console

    task_ctx = TaskContext(config=ctx.config, console=console, cwd=ctx.config_path.parent)
    registry = build_registry(task_ctx)

    result = registry.run(target)
    if isinstance(result, Err):
        error = result.error
        if isinstance(error, PipelineError):
            console.error(error.message)
            console.print("Run `docship list` to see available targets.", Style.DIM)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        print_task_error(error.task, error.error, console)
        if error.completed:
            console.print(f"completed before failure: {', '.join(error.completed)}", Style.DIM)
        raise typer.Exit(code=task_error_exit_code(error.error))

    run_info = result.value
    console.success(
        f"{run_info.target}: {len(run_info.completed)} task(s) in {run_info.elapsed_seconds:.1f}s"
    )
