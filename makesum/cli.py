from __future__ import annotations

import sys
from pathlib import Path

import click
import typer

from . import __version__
from .cli_shared import (
    GlobalOpts,
    InvalidArgument,
    Terminate,
    _bootstrap_env,
    _present_workdir,
    _rich_error,
)
from .runner import MakeSum, RunOptions

PROG_NAME = "makesum"

# Newer typer releases raise from a bundled click copy rather than `click`.
_TYPER_CLICK_EXCEPTION = next(
    c for c in typer.BadParameter.__mro__ if c.__name__ == "ClickException"
)
_CLICK_EXCEPTIONS = (click.ClickException, _TYPER_CLICK_EXCEPTION)

app = typer.Typer(
    name=PROG_NAME,
    help="Generate a summary for documentation files.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit(code=0)


@app.command(add_help_option=False)
def makesum(
    ctx: typer.Context,
    directory: str | None = typer.Option(
        None,
        "-d",
        "--dir",
        help="Working location, absolute or relative to the current directory",
    ),
    show_help: bool = typer.Option(False, "-h", "--help", help="Show help and exit"),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress INFO output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    del version
    settings = GlobalOpts.from_env(quiet=quiet)
    cmd_name = ctx.find_root().info_name or PROG_NAME
    runner = MakeSum(
        _present_workdir(),
        RunOptions(dir=directory, help=show_help),
        cmd_name,
        settings=settings,
    )
    if not runner.run():
        raise typer.Exit(code=1)


def _prog_name(script: str) -> str:
    name = Path(script or "").name
    if not name or name == "__main__.py":
        return PROG_NAME
    return name


def main(argv: list[str] | None = None) -> int:
    prog_name = PROG_NAME if argv is not None else _prog_name(sys.argv[0])
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        _bootstrap_env()
        result = app(args=argv, prog_name=prog_name, standalone_mode=False)
        if result is None:
            return 0
        return int(result)
    except typer.Exit as e:
        return int(e.exit_code)
    except _CLICK_EXCEPTIONS as e:
        _rich_error(e.format_message())
        return int(e.exit_code)
    except InvalidArgument as e:
        _rich_error(str(e))
        return 2
    except Terminate as e:
        return e.code


if __name__ == "__main__":
    raise SystemExit(main())
