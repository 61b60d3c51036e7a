from __future__ import annotations

import os
from pathlib import Path

import typer

from docship import __version__
from docship.cli.commands.list_cmd import list_targets
from docship.cli.commands.run_cmd import run
from docship.cli.context import CONFIG_ENV_VAR
from docship.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(run)
app.command("list")(list_targets)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to docship.json (default: ./docship.json)",
    ),
) -> None:
    if config is not None:
        try:
            path = config.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --config: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: Can't find config file: {path}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

        os.environ[CONFIG_ENV_VAR] = str(path)


def main() -> None:
    app()
