from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from docship.adapters.http import HttpClient, RealHttpClient
from docship.adapters.timeouts import HTTP_TIMEOUT_SECONDS
from docship.core.config import Config
from docship.output.console import ConsoleProtocol


def _real_http() -> HttpClient:
    return RealHttpClient(timeout=HTTP_TIMEOUT_SECONDS)


@dataclass(frozen=True, slots=True)
class TaskContext:
    """Everything a task may read. Built once per run and never mutated.

    ``env`` is a snapshot of the environment variables the publishing tasks
    read (MGAPIKEY, TOKEN, CHOCO_TOKEN); tests pass their own mapping.
    Relative config paths resolve against ``cwd``.
    """

    config: Config
    console: ConsoleProtocol
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    cwd: Path = field(default_factory=Path.cwd)
    http: HttpClient = field(default_factory=_real_http)

    def resolve(self, value: str) -> Path:
        return (self.cwd / Path(value).expanduser()).resolve()
