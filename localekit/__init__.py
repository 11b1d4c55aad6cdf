"""
localekit

Locale-chain string lookup, printf-style substitution and
locale-specific asset path resolution.
"""

from .config import LocaleKitSettings
from .exceptions import (
    DictionaryFetchError,
    DictionaryFormatError,
    DictionaryLoadError,
    KeyNotFoundError,
    LocaleKitError,
    NotConfiguredError,
    NotReadyError,
)
from .formatter import StringFormatter, format_template, localized_path
from .logging import setup_logging
from .platform_locale import detect_platform_locale, normalize_locale
from .resolver import LocaleResolver
from .transport import AsyncHttpExistenceProbe, DictionaryFetcher, HttpExistenceProbe
from .translator import Translator

__version__ = Translator.VERSION
__all__ = [
    # Core
    "LocaleResolver",
    "StringFormatter",
    "Translator",
    "format_template",
    "localized_path",
    # Capabilities
    "DictionaryFetcher",
    "HttpExistenceProbe",
    "AsyncHttpExistenceProbe",
    "detect_platform_locale",
    "normalize_locale",
    # Exceptions
    "LocaleKitError",
    "NotReadyError",
    "KeyNotFoundError",
    "NotConfiguredError",
    "DictionaryLoadError",
    "DictionaryFetchError",
    "DictionaryFormatError",
    "LocaleKitSettings",
    "setup_logging",
]
