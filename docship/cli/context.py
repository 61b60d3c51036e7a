from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from docship.core.config import CONFIG_FILENAME, Config, load_config
from docship.core.errors import ErrorCode
from docship.core.result import Err
from docship.output.console import ConsoleProtocol, RichConsole

CONFIG_ENV_VAR = "DOCSHIP_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config_path: Path
    config: Config
    console: ConsoleProtocol


def config_path() -> Path:
    """``--config`` (exported as DOCSHIP_CONFIG) or ./docship.json."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return (Path.cwd() / CONFIG_FILENAME).resolve()


def build_context() -> CLIContext:
    console = RichConsole()
    path = config_path()

    result = load_config(path)
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(config_path=path, config=result.value, console=console)
