import logging

import pytest

from localekit.config import LocaleKitSettings, parse_locale_list
from localekit.logging import setup_logging
from localekit.platform_locale import detect_platform_locale, normalize_locale


@pytest.fixture
def clean_env(monkeypatch):
    for var in (
        "LOCALEKIT_FILE_SEPARATOR",
        "LOCALEKIT_DEFAULT_LOCALE",
        "LOCALEKIT_FALLBACK_LOCALE",
        "LOCALEKIT_BASE_URL",
        "LOCALEKIT_TIMEOUT",
        "LOCALEKIT_LOG_DIR",
        "LOCALEKIT_LOCALE",
        "LC_ALL",
        "LC_MESSAGES",
        "LANG",
        "LANGUAGE",
    ):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_parse_locale_list():
    assert parse_locale_list(None) is None
    assert parse_locale_list(" , ") is None
    assert parse_locale_list("fr") == "fr"
    assert parse_locale_list("fr-CA, fr") == ["fr-CA", "fr"]


def test_settings_defaults(clean_env):
    settings = LocaleKitSettings.from_env()
    assert settings == LocaleKitSettings()
    assert settings.file_separator == "_"


def test_settings_from_env(clean_env):
    clean_env.setenv("LOCALEKIT_FILE_SEPARATOR", "-")
    clean_env.setenv("LOCALEKIT_DEFAULT_LOCALE", "pt-BR,pt")
    clean_env.setenv("LOCALEKIT_FALLBACK_LOCALE", "en")
    clean_env.setenv("LOCALEKIT_BASE_URL", "https://cdn.example.com/")
    clean_env.setenv("LOCALEKIT_TIMEOUT", "2.5")
    settings = LocaleKitSettings.from_env()
    assert settings.file_separator == "-"
    assert settings.locale == ["pt-BR", "pt"]
    assert settings.fallback_locale == "en"
    assert settings.base_url == "https://cdn.example.com"
    assert settings.timeout == 2.5


def test_settings_invalid_timeout(clean_env):
    clean_env.setenv("LOCALEKIT_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        LocaleKitSettings.from_env()


def test_normalize_locale():
    assert normalize_locale("en_US.UTF-8") == "en-US"
    assert normalize_locale("pt-br") == "pt-BR"
    assert normalize_locale("de") == "de"
    assert normalize_locale("fr_FR:en") == "fr-FR"
    assert normalize_locale("C") is None
    assert normalize_locale("POSIX") is None
    assert normalize_locale("") is None


def test_detect_platform_locale_priority(clean_env):
    clean_env.setenv("LANG", "de_DE.UTF-8")
    clean_env.setenv("LC_ALL", "C")
    assert detect_platform_locale() == "de-DE"
    clean_env.setenv("LOCALEKIT_LOCALE", "ja")
    assert detect_platform_locale() == "ja"


def test_setup_logging_uses_settings_log_dir(tmp_path):
    settings = LocaleKitSettings(log_dir=str(tmp_path))
    logger = setup_logging(settings, name="localekit.test")
    setup_logging(settings, verbose=True, name="localekit.test")
    try:
        assert len(logger.handlers) == 2
        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert console[0].level == logging.DEBUG
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in (tmp_path / "localekit.test.log").read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_setup_logging_without_log_dir():
    logger = setup_logging(LocaleKitSettings(), name="localekit.console")
    try:
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
