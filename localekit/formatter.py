from __future__ import annotations

import logging
import re
from typing import Any, Awaitable, Callable, Optional

from .exceptions import KeyNotFoundError, NotReadyError
from .resolver import LocaleResolver

logger = logging.getLogger("localekit")

DEFAULT_FILE_SEPARATOR = "_"

ExistsProbe = Callable[[str], bool]
AsyncExistsProbe = Callable[[str], Awaitable[bool]]

_PLACEHOLDER_RE = re.compile(r"([^%]|^)%(?:(\d+)\$)?s")
_ESCAPED_RE = re.compile(r"%%s")


def format_template(template: str, *args: Any) -> str:
    """printf-style substitution of ``%s`` and ``%N$s`` placeholders.

    Unindexed placeholders take arguments in order; ``%N$s`` refers to the
    N-th argument (1-based) and may repeat without advancing the order.
    ``%%s`` renders as a literal ``%s``. When the first argument is a list or
    tuple it is the whole argument sequence and any further arguments are
    ignored. A placeholder without a matching argument renders as an empty
    string.
    """
    if not args:
        return template
    if isinstance(args[0], (list, tuple)):
        values = list(args[0])
    else:
        values = list(args)
    cursor = 0

    def _replace(match: re.Match) -> str:
        nonlocal cursor
        prefix, position = match.group(1), match.group(2)
        if position is not None:
            index = int(position) - 1
            if index < 0 or index >= len(values):
                return prefix
            return prefix + str(values[index])
        if cursor >= len(values):
            return prefix
        value = values[cursor]
        cursor += 1
        return prefix + str(value)

    result = _PLACEHOLDER_RE.sub(_replace, template)
    return _ESCAPED_RE.sub("%s", result)


def localized_path(path: str, locale: str, separator: str = DEFAULT_FILE_SEPARATOR) -> str:
    """Insert ``separator + locale`` before the extension of the file name."""
    name_start = path.rfind("/") + 1
    dot = path.rfind(".", name_start)
    if dot <= name_start:
        return f"{path}{separator}{locale}"
    return f"{path[:dot]}{separator}{locale}{path[dot:]}"


class StringFormatter:
    """Reads a resolver's effective table and locale chain to localize output."""

    def __init__(
        self,
        resolver: LocaleResolver,
        *,
        probe: Optional[ExistsProbe] = None,
        async_probe: Optional[AsyncExistsProbe] = None,
        file_separator: str = DEFAULT_FILE_SEPARATOR,
    ) -> None:
        self._resolver = resolver
        self._probe = probe
        self._async_probe = async_probe
        self.file_separator = file_separator

    @property
    def resolver(self) -> LocaleResolver:
        return self._resolver

    def format(self, template: str, *args: Any) -> str:
        return format_template(template, *args)

    def translate(self, key: str, *args: Any) -> str:
        current = self._resolver.current
        if current is None:
            raise NotReadyError()
        if key not in current:
            raise KeyNotFoundError(key)
        return format_template(current[key], *args)

    def candidate_paths(self, path: str) -> list[str]:
        return [localized_path(path, code, self.file_separator) for code in self._resolver.locales()]

    def resolve_asset_path(self, path: str) -> str:
        if not self._resolver.locale:
            return path
        if self._probe is None:
            logger.warning(f"No existence probe configured, keeping {path}")
            return path
        for candidate in self.candidate_paths(path):
            if self._probe(candidate):
                logger.debug(f"Resolved asset {path} -> {candidate}")
                return candidate
        return path

    async def resolve_asset_path_async(self, path: str) -> str:
        if not self._resolver.locale:
            return path
        if self._async_probe is None:
            logger.warning(f"No async existence probe configured, keeping {path}")
            return path
        # Candidates are probed one at a time; the first hit in priority order wins.
        for candidate in self.candidate_paths(path):
            if await self._async_probe(candidate):
                logger.debug(f"Resolved asset {path} -> {candidate}")
                return candidate
        return path


__all__ = [
    "StringFormatter",
    "format_template",
    "localized_path",
    "ExistsProbe",
    "AsyncExistsProbe",
    "DEFAULT_FILE_SEPARATOR",
]
