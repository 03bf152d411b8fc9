from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from .cli_shared import GlobalOpts, InvalidArgument, Terminate
from .config import COLORS, LanguageSpec, resolve_language

_ESC = "\x1b"
_UNCOLORED_PLACEHOLDER_RE = re.compile(r"(?<!>)(%[a-zA-Z0-9])")
_COLORED_PLACEHOLDER_RE = re.compile(r"([0-9]+)>(%[a-zA-Z0-9])")


def _ansi(color: str, text: str) -> str:
    return f"{_ESC}[38;5;{color}m{text}{_ESC}[0m"


def _first_str(*values: Any) -> str | None:
    for v in values:
        if isinstance(v, str) and v.strip():
            return v
    return None


@dataclass(frozen=True)
class RunOptions:
    dir: str | None = None
    help: bool = False

    @classmethod
    def from_mapping(cls, argv: Mapping[str, Any]) -> "RunOptions":
        """Build options from getopt-style keys (``d``/``dir``, ``h``/``help``).

        Flag keys count when present, whatever their value.
        """
        return cls(
            dir=_first_str(argv.get("d"), argv.get("dir")),
            help="h" in argv or "help" in argv,
        )


class MakeSum:
    """Single invocation of the summary command.

    The working directory is validated eagerly; output goes to replaceable
    sinks so callers can capture it.
    """

    def __init__(
        self,
        workdir: str,
        argv: RunOptions | Mapping[str, Any],
        cmd_name: str,
        *,
        settings: GlobalOpts | None = None,
    ) -> None:
        workdir = (workdir or "").strip()
        if not workdir:
            raise InvalidArgument("workdir parameter in constructor can't be empty.")
        if not Path(workdir).is_dir():
            raise InvalidArgument(f"workdir `{workdir}` doesn't exist.")
        self._workdir = workdir
        self._options = argv if isinstance(argv, RunOptions) else RunOptions.from_mapping(argv)
        self._cmd_name = cmd_name
        self._settings = settings or GlobalOpts()
        self._language = resolve_language(self._settings.lang)
        self._stdout: TextIO | None = None
        self._stderr: TextIO | None = None
        self._no_terminate = False
        self._target_dir: str | None = None

    @property
    def workdir(self) -> str:
        return self._workdir

    @property
    def cmd_name(self) -> str:
        return self._cmd_name

    @property
    def options(self) -> RunOptions:
        return self._options

    @property
    def language(self) -> LanguageSpec:
        return self._language

    @property
    def target_dir(self) -> str | None:
        """Directory resolved by the last ``run()``; ``None`` before that."""
        return self._target_dir

    def run(self) -> bool:
        directory = _first_str(self._options.dir) or self._workdir
        self._target_dir = directory if directory.startswith("/") else f"{self._workdir}/{directory}"

        if self._options.help:
            self.help()
            return True

        # Summary generation for self._language files under target_dir plugs in here.
        return True

    def help(self, level: int = 0) -> None:
        lang = self._language
        man = (
            "\n"
            f"Usage : {self._cmd_name} [OPTIONS]\n"
            "\n"
            f"Writes a summary of {lang.name} files between {lang.open_tag} and {lang.close_tag},\n"
            f"in files marked with {lang.insert_tag}.\n"
            "\n"
            "-d, --dir   Set the working location.\n"
            "-h, --help  Show this help and exit.\n"
        )
        self._out.write(man)
        if level:
            raise Terminate(level)

    def highlight(self, message: str) -> str:
        """Colorize ``%x`` placeholders.

        ``"196>%s"`` picks color 196 for that placeholder; bare ones get the
        default input color.
        """
        message = _UNCOLORED_PLACEHOLDER_RE.sub(rf"{COLORS.input}>\1", message)
        return _COLORED_PLACEHOLDER_RE.sub(lambda m: _ansi(m.group(1), m.group(2)), message)

    def write_error(self, message: str, args: Sequence[Any] = (), level: int = 1) -> None:
        """Write a WARNING (level 0) or ERROR line to the error sink.

        At error level the invocation ends with exit code ``level`` unless
        termination is suppressed.
        """
        level_str = "ERROR" if level else "WARNING"
        color = COLORS.error if level else COLORS.warning
        line = f"[ {_ansi(color, level_str)} ] :: {self.highlight(message)}\n"
        self._err.write(self._format(line, args))
        if level and not self._no_terminate:
            raise Terminate(level)

    def write_info(self, message: str, args: Sequence[Any] = ()) -> None:
        if self._settings.silent:
            return
        line = f"[ INFO ] :: {self.highlight(message)}\n"
        self._out.write(self._format(line, args))

    def set_stdout(self, stream: TextIO | None = None) -> None:
        self._stdout = stream

    def set_stderr(self, stream: TextIO | None = None) -> None:
        self._stderr = stream

    def set_no_terminate(self, flag: bool = False) -> None:
        self._no_terminate = bool(flag)

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @staticmethod
    def _format(line: str, args: Sequence[Any]) -> str:
        if not args:
            # Placeholders without values stay literal; only escaped percents collapse.
            return line.replace("%%", "%")
        return line % tuple(args)
