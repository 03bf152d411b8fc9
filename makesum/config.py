"""Process-wide, read-only configuration: palette and language registry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping

from .cli_shared import InvalidArgument

SEPARATOR = ","


@dataclass(frozen=True)
class Palette:
    error: str = "196"
    input: str = "220"
    success: str = "76"
    warning: str = "208"
    text: str = "221"
    keyword: str = "39"


COLORS = Palette()


@dataclass(frozen=True)
class LanguageSpec:
    name: str
    extension: re.Pattern[str]
    insert_tag: str
    open_tag: str
    close_tag: str
    aliases: tuple[str, ...] = field(default=())

    def matches(self, path: str | PurePath) -> bool:
        return bool(self.extension.search(PurePath(path).name))


LANGUAGES: Mapping[str, LanguageSpec] = MappingProxyType(
    {
        "markdown": LanguageSpec(
            name="markdown",
            extension=re.compile(r"md$", re.IGNORECASE),
            insert_tag="[](MakeSummary)",
            open_tag="[](BeginSummary)",
            close_tag="[](EndSummary)",
            aliases=("md",),
        ),
    }
)

ALIASES: Mapping[str, str] = MappingProxyType(
    {alias: spec.name for spec in LANGUAGES.values() for alias in spec.aliases}
)

DEFAULT_LANG = "markdown"


def resolve_language(name: str | None) -> LanguageSpec:
    key = (name or "").strip().lower() or DEFAULT_LANG
    key = ALIASES.get(key, key)
    spec = LANGUAGES.get(key)
    if spec is None:
        known = SEPARATOR.join(sorted([*LANGUAGES, *ALIASES]))
        raise InvalidArgument(f"unknown language {name!r} (expected one of: {known})")
    return spec
