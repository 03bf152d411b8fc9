from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape


class MakeSumError(Exception):
    pass


class InvalidArgument(MakeSumError, ValueError):
    pass


class Terminate(MakeSumError):
    """Ends the invocation with ``code`` once it reaches the entry point."""

    def __init__(self, code: int) -> None:
        super().__init__(f"terminated with exit code {code}")
        self.code = int(code)


MAKESUM_SILENT = "MAKESUM_SILENT"
MAKESUM_LANG = "MAKESUM_LANG"

_ERROR_CONSOLE = Console(stderr=True)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(
        f"[bold red]error:[/bold red] {escape(msg)}",
        markup=True,
        highlight=False,
        soft_wrap=True,
    )


def _truthy(raw: str | None) -> bool:
    return str(raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_or_none(*names: str) -> str | None:
    for n in names:
        v = (os.environ.get(n) or "").strip()
        if v:
            return v
    return None


def _bootstrap_env() -> None:
    # Discover and load .env without overriding already-exported values.
    load_dotenv()


def _present_workdir() -> str:
    return _env_or_none("PWD") or os.getcwd()


@dataclass(frozen=True)
class GlobalOpts:
    silent: bool = False
    lang: str = "markdown"

    @classmethod
    def from_env(cls, *, quiet: bool = False) -> "GlobalOpts":
        return cls(
            silent=quiet or _truthy(os.environ.get(MAKESUM_SILENT)),
            lang=_env_or_none(MAKESUM_LANG) or "markdown",
        )
