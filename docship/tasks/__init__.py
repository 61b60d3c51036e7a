"""Named tasks, pipelines and the runner that executes them."""

from .catalog import PIPELINES, TASKS, build_registry
from .context import TaskContext
from .registry import PipelineError, PipelineFailure, PipelineRun, TaskRegistry

__all__ = [
    "PIPELINES",
    "TASKS",
    "PipelineError",
    "PipelineFailure",
    "PipelineRun",
    "TaskContext",
    "TaskRegistry",
    "build_registry",
]
