"""The docfx release targets.

``TASKS`` maps each task name to its body; ``PIPELINES`` lists the ordered
steps of each composite target. ``build_registry`` binds both to one
``TaskContext``.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from docship.core.result import Result
from docship.core.task_errors import TaskError

from . import definitions
from .context import TaskContext
from .registry import TaskRegistry

__all__ = ["DEFAULT_TARGET", "PIPELINES", "TASKS", "build_registry"]

DEFAULT_TARGET = "default"

TASKS: dict[str, Callable[[TaskContext], Result[None, TaskError]]] = {
    "build": definitions.build,
    "clean": definitions.clean,
    "e2eTest:installFirefox": definitions.install_firefox,
    "e2eTest:buildSeed": definitions.build_seed,
    "e2eTest:restore": definitions.restore_e2e_tests,
    "e2eTest:test": definitions.run_e2e_tests,
    "publish:myget-dev": partial(definitions.publish_myget, feed="dev"),
    "publish:myget-test": partial(definitions.publish_myget, feed="test"),
    "publish:myget-master": partial(definitions.publish_myget, feed="master"),
    "updateGhPage": definitions.update_gh_page,
    "publish:gh-release": definitions.publish_gh_release,
    "publish:chocolatey": definitions.publish_chocolatey,
}

PIPELINES: dict[str, tuple[str, ...]] = {
    "e2eTest": (
        "e2eTest:installFirefox",
        "e2eTest:buildSeed",
        "e2eTest:restore",
        "e2eTest:test",
    ),
    "test": ("clean", "build", "e2eTest", "publish:myget-test"),
    "dev": ("clean", "build", "e2eTest"),
    "stable": ("clean", "build", "e2eTest", "publish:myget-dev"),
    "master": (
        "clean",
        "build",
        "e2eTest",
        "updateGhPage",
        "publish:gh-release",
        "publish:chocolatey",
        "publish:myget-master",
    ),
    DEFAULT_TARGET: ("dev",),
}


def build_registry(ctx: TaskContext) -> TaskRegistry:
    registry = TaskRegistry(ctx.console)
    for name, fn in TASKS.items():
        registry.add_task(name, partial(fn, ctx))
    for name, steps in PIPELINES.items():
        registry.add_pipeline(name, steps)
    return registry
