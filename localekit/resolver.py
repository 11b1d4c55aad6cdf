from __future__ import annotations

import inspect
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from .exceptions import DictionaryFormatError, NotConfiguredError
from .platform_locale import detect_platform_locale

logger = logging.getLogger("localekit")

Table = dict[str, str]
Dictionary = dict[str, Table]
LocalePreference = Union[str, Sequence[str]]
FetchJSON = Callable[[str], Awaitable[Mapping[str, Any]]]
PlatformLocale = Callable[[], Optional[str]]
LoadCallback = Callable[[], Any]


class LocaleResolver:
    """Holds the per-locale dictionaries and the active locale chain.

    Every change to the dictionary, the locale preference or the fallback
    locale recomputes the effective table from scratch. Lookups read the
    table produced by the most recent rebuild.
    """

    def __init__(
        self,
        *,
        fetcher: Optional[FetchJSON] = None,
        platform_locale: Optional[PlatformLocale] = None,
    ) -> None:
        self._fetcher = fetcher
        self._platform_locale = platform_locale or detect_platform_locale
        self._dictionary: Optional[Dictionary] = None
        self._locale: Optional[LocalePreference] = None
        self._fallback_locale: Optional[str] = None
        self._current: Optional[Table] = None

    @property
    def locale(self) -> Optional[LocalePreference]:
        if self._locale is None or isinstance(self._locale, str):
            return self._locale
        return list(self._locale)

    @locale.setter
    def locale(self, value: Optional[LocalePreference]) -> None:
        self._locale = _own_preference(value)
        self.rebuild()

    @property
    def fallback_locale(self) -> Optional[str]:
        return self._fallback_locale

    @fallback_locale.setter
    def fallback_locale(self, value: Optional[str]) -> None:
        self._fallback_locale = value
        self.rebuild()

    @property
    def dictionary(self) -> Optional[Mapping[str, Mapping[str, str]]]:
        if self._dictionary is None:
            return None
        return MappingProxyType(self._dictionary)

    @property
    def current(self) -> Optional[Mapping[str, str]]:
        if self._current is None:
            return None
        return MappingProxyType(self._current)

    @property
    def is_ready(self) -> bool:
        return self._current is not None

    def configure(
        self,
        *,
        locale: Optional[LocalePreference] = None,
        fallback_locale: Optional[str] = None,
    ) -> None:
        """Set several values at once with a single rebuild."""
        if locale is not None:
            self._locale = _own_preference(locale)
        if fallback_locale is not None:
            self._fallback_locale = fallback_locale
        self.rebuild()

    def load_dictionary(self, source: Mapping[str, Any], locale: Optional[str] = None) -> None:
        if isinstance(source, str):
            raise TypeError("Remote dictionaries are loaded asynchronously, use 'await load(source)'")
        if not isinstance(source, Mapping):
            raise DictionaryFormatError(f"Expected a mapping, got {type(source).__name__}")

        # Validate everything before touching stored state.
        if locale:
            tables = {locale: _as_table(source, locale)}
        else:
            tables = {str(code): _as_table(table, code) for code, table in source.items()}

        if self._dictionary is None:
            self._dictionary = {}
        if locale:
            self._dictionary[locale] = tables[locale]
            self._locale = locale
            logger.debug(f"Loaded {len(tables[locale])} strings for locale {locale}")
        else:
            for code, table in tables.items():
                self._dictionary.setdefault(code, {}).update(table)
            logger.debug(f"Merged dictionary for locales: {', '.join(tables)}")
        self.rebuild()

    async def load(
        self,
        source: Union[str, Mapping[str, Any]],
        locale: Optional[str] = None,
        callback: Optional[LoadCallback] = None,
    ) -> None:
        """Load a dictionary from memory or through the fetch capability.

        A string source is passed to the injected fetcher and the parsed
        result is loaded as if it had been given directly. The callback runs
        after the dictionary is in place.
        """
        if isinstance(source, str):
            if self._fetcher is None:
                raise NotConfiguredError(f"No fetcher configured to load '{source}'")
            logger.info(f"Fetching dictionary: {source}")
            data = await self._fetcher(source)
            if not isinstance(data, Mapping):
                raise DictionaryFormatError(
                    f"Dictionary at '{source}' is not an object", source=source
                )
            self.load_dictionary(data, locale)
        else:
            self.load_dictionary(source, locale)

        if callback is not None:
            result = callback()
            if inspect.isawaitable(result):
                await result

    def reset(self) -> None:
        self._dictionary = None
        self._locale = None
        self._fallback_locale = None
        self._current = None

    def auto_detect(self, use_country_locale: bool = True) -> LocalePreference:
        lang = self._platform_locale() or "en"
        lang_only = lang[:2]
        self._locale = [lang, lang_only] if use_country_locale else lang_only
        logger.info(f"Detected locale {lang}, using {self._locale}")
        self.rebuild()
        return self.locale

    def locales(self) -> list[str]:
        """Return the locale chain from most to least preferred."""
        if not self._locale:
            return []
        chain = [self._locale] if isinstance(self._locale, str) else list(self._locale)
        if self._fallback_locale and self._fallback_locale not in chain:
            chain.append(self._fallback_locale)
        return chain

    def rebuild(self) -> None:
        if not self._locale or self._dictionary is None:
            return
        current: Table = {}
        chain = self.locales()
        for code in reversed(chain):
            current.update(self._dictionary.get(code) or {})
        self._current = current
        logger.debug(f"Rebuilt effective table: {len(current)} keys from {chain}")


def _own_preference(value: Optional[LocalePreference]) -> Optional[LocalePreference]:
    if value is None or isinstance(value, str):
        return value
    return list(value)


def _as_table(table: Any, code: Any) -> Table:
    if not isinstance(table, Mapping):
        raise DictionaryFormatError(f"Translation table for '{code}' is not an object")
    for key, value in table.items():
        if not isinstance(value, str):
            raise DictionaryFormatError(
                f"Translation for '{key}' in '{code}' must be a string, got {type(value).__name__}"
            )
    return {str(key): value for key, value in table.items()}


__all__ = [
    "LocaleResolver",
    "Table",
    "Dictionary",
    "LocalePreference",
    "FetchJSON",
    "PlatformLocale",
    "LoadCallback",
]
