from __future__ import annotations


class LocaleKitError(Exception):
    pass


class NotReadyError(LocaleKitError):
    """Raised when a lookup happens before a dictionary and locale are set."""

    def __init__(self, message: str = "Must load a dictionary and set a locale before translating"):
        super().__init__(message)


class KeyNotFoundError(LocaleKitError, KeyError):
    def __init__(self, key: str):
        super().__init__(f"No translation string found matching '{key}'")
        self.key = key

    def __str__(self) -> str:
        return str(self.args[0])


class NotConfiguredError(LocaleKitError):
    pass


class DictionaryLoadError(LocaleKitError):
    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class DictionaryFetchError(DictionaryLoadError):
    def __init__(
        self,
        message: str,
        source: str | None = None,
        status_code: int = 0,
        detail: str | None = None,
    ):
        super().__init__(message, source=source)
        self.status_code = status_code
        self.detail = detail


class DictionaryFormatError(DictionaryLoadError):
    pass


__all__ = [
    "LocaleKitError",
    "NotReadyError",
    "KeyNotFoundError",
    "NotConfiguredError",
    "DictionaryLoadError",
    "DictionaryFetchError",
    "DictionaryFormatError",
]
