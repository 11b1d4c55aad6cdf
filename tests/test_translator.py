import httpx
import pytest

from localekit import Translator
from localekit.config import LocaleKitSettings
from localekit.exceptions import KeyNotFoundError, NotReadyError
from localekit.transport import AsyncHttpExistenceProbe, DictionaryFetcher, HttpExistenceProbe


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/i18n/strings.json":
        return httpx.Response(
            200,
            json={
                "en": {"title": "Welcome, %s", "count": "%1$s of %2$s"},
                "fr": {"title": "Bienvenue, %s"},
            },
        )
    if request.method == "HEAD" and request.url.path == "/img/banner_fr.png":
        return httpx.Response(200)
    return httpx.Response(404)


def _translator(**kwargs):
    transport = httpx.MockTransport(_handler)
    return Translator(
        fetcher=DictionaryFetcher(client=httpx.AsyncClient(transport=transport)),
        probe=HttpExistenceProbe(client=httpx.Client(transport=transport)),
        async_probe=AsyncHttpExistenceProbe(client=httpx.AsyncClient(transport=transport)),
        platform_locale=lambda: "fr-CA",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_remote_load_then_translate():
    translator = _translator()
    loaded = []
    await translator.load(
        "https://cdn.example.com/i18n/strings.json",
        callback=lambda: loaded.append(True),
    )
    translator.fallback_locale = "en"
    translator.auto_detect()

    assert loaded == [True]
    assert translator.locale == ["fr-CA", "fr"]
    assert translator.t("title", "Ana") == "Bienvenue, Ana"
    assert translator.t("count", 1, 5) == "1 of 5"


def test_shorthands_and_asset_resolution():
    translator = _translator()
    translator.load_dictionary({"en": {"a": "A"}})
    translator.locale = ["fr", "en"]
    assert translator.t("a") == "A"
    assert translator.f("https://cdn.example.com/img/banner.png") == "https://cdn.example.com/img/banner_fr.png"
    assert translator.f("https://cdn.example.com/img/logo.png") == "https://cdn.example.com/img/logo.png"


@pytest.mark.asyncio
async def test_async_asset_resolution():
    translator = _translator()
    translator.locale = "fr"
    resolved = await translator.resolve_asset_path_async("https://cdn.example.com/img/banner.png")
    assert resolved == "https://cdn.example.com/img/banner_fr.png"


def test_strict_errors_surface():
    translator = _translator()
    with pytest.raises(NotReadyError):
        translator.t("a")
    translator.load_dictionary({"a": "A"}, "en")
    with pytest.raises(KeyNotFoundError):
        translator.t("b")
    translator.reset()
    with pytest.raises(NotReadyError):
        translator.t("a")


def test_file_separator_property():
    translator = _translator(file_separator=".")
    assert translator.file_separator == "."
    translator.file_separator = "_"
    assert translator.formatter.file_separator == "_"


def test_from_settings_applies_locale_chain():
    settings = LocaleKitSettings(locale=["de", "en"], fallback_locale="en", file_separator="-")
    translator = Translator.from_settings(settings, platform_locale=lambda: "en")
    translator.load_dictionary({"en": {"a": "A"}, "de": {"b": "B"}})
    assert translator.locale == ["de", "en"]
    assert translator.fallback_locale == "en"
    assert translator.file_separator == "-"
    assert translator.t("a") == "A"
    assert translator.t("b") == "B"


@pytest.mark.asyncio
async def test_context_manager_closes_default_capabilities():
    async with Translator() as translator:
        owned = list(translator._owned)
        assert len(owned) == 3
    assert translator._owned == []
