from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from .config import LocaleKitSettings
from .formatter import (
    DEFAULT_FILE_SEPARATOR,
    AsyncExistsProbe,
    ExistsProbe,
    StringFormatter,
    format_template,
)
from .resolver import FetchJSON, LoadCallback, LocalePreference, LocaleResolver, PlatformLocale
from .transport import AsyncHttpExistenceProbe, DictionaryFetcher, HttpExistenceProbe

logger = logging.getLogger("localekit")


class Translator:
    """Resolver and formatter behind one object.

    ``t`` and ``f`` are shorthands for ``translate`` and
    ``resolve_asset_path``. Capabilities that are not injected are created
    from the defaults in ``localekit.transport`` and released by ``close``.
    """

    VERSION = "1.0.5"

    def __init__(
        self,
        *,
        fetcher: Optional[FetchJSON] = None,
        probe: Optional[ExistsProbe] = None,
        async_probe: Optional[AsyncExistsProbe] = None,
        platform_locale: Optional[PlatformLocale] = None,
        file_separator: str = DEFAULT_FILE_SEPARATOR,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        transport_kwargs: dict[str, Any] = {"base_url": base_url}
        if timeout is not None:
            transport_kwargs["timeout"] = timeout
        self._owned: list[Any] = []
        if fetcher is None:
            fetcher = self._own(DictionaryFetcher(**transport_kwargs))
        if probe is None:
            probe = self._own(HttpExistenceProbe(**transport_kwargs))
        if async_probe is None:
            async_probe = self._own(AsyncHttpExistenceProbe(**transport_kwargs))
        self.resolver = LocaleResolver(fetcher=fetcher, platform_locale=platform_locale)
        self.formatter = StringFormatter(
            self.resolver,
            probe=probe,
            async_probe=async_probe,
            file_separator=file_separator,
        )

    @classmethod
    def from_settings(cls, settings: Optional[LocaleKitSettings] = None, **kwargs: Any) -> "Translator":
        settings = settings or LocaleKitSettings.from_env()
        translator = cls(
            file_separator=settings.file_separator,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )
        translator.resolver.configure(
            locale=settings.locale,
            fallback_locale=settings.fallback_locale,
        )
        logger.info(
            f"Translator configured: locale={settings.locale}, fallback={settings.fallback_locale}"
        )
        return translator

    def _own(self, capability: Any) -> Any:
        self._owned.append(capability)
        return capability

    @property
    def locale(self) -> Optional[LocalePreference]:
        return self.resolver.locale

    @locale.setter
    def locale(self, value: Optional[LocalePreference]) -> None:
        self.resolver.locale = value

    @property
    def fallback_locale(self) -> Optional[str]:
        return self.resolver.fallback_locale

    @fallback_locale.setter
    def fallback_locale(self, value: Optional[str]) -> None:
        self.resolver.fallback_locale = value

    @property
    def file_separator(self) -> str:
        return self.formatter.file_separator

    @file_separator.setter
    def file_separator(self, value: str) -> None:
        self.formatter.file_separator = value

    def load_dictionary(self, source: Mapping[str, Any], locale: Optional[str] = None) -> "Translator":
        self.resolver.load_dictionary(source, locale)
        return self

    async def load(
        self,
        source: Union[str, Mapping[str, Any]],
        locale: Optional[str] = None,
        callback: Optional[LoadCallback] = None,
    ) -> "Translator":
        await self.resolver.load(source, locale, callback)
        return self

    def reset(self) -> "Translator":
        self.resolver.reset()
        return self

    def auto_detect(self, use_country_locale: bool = True) -> LocalePreference:
        return self.resolver.auto_detect(use_country_locale)

    def translate(self, key: str, *args: Any) -> str:
        return self.formatter.translate(key, *args)

    t = translate

    def format(self, template: str, *args: Any) -> str:
        return format_template(template, *args)

    def resolve_asset_path(self, path: str) -> str:
        return self.formatter.resolve_asset_path(path)

    f = resolve_asset_path

    async def resolve_asset_path_async(self, path: str) -> str:
        return await self.formatter.resolve_asset_path_async(path)

    async def close(self) -> None:
        for capability in self._owned:
            result = capability.close()
            if result is not None:
                await result
        self._owned.clear()

    async def __aenter__(self) -> "Translator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


__all__ = ["Translator"]
