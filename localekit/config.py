from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

from .formatter import DEFAULT_FILE_SEPARATOR
from .transport import DEFAULT_TIMEOUT


def parse_locale_list(raw: Optional[str]) -> Optional[Union[str, list[str]]]:
    """``"fr"`` stays a single code, ``"fr-CA,fr"`` becomes an ordered list."""
    if not raw:
        return None
    codes = [code.strip() for code in raw.split(",") if code.strip()]
    if not codes:
        return None
    if len(codes) == 1:
        return codes[0]
    return codes


@dataclass(frozen=True)
class LocaleKitSettings:
    file_separator: str = DEFAULT_FILE_SEPARATOR
    locale: Optional[Union[str, list[str]]] = None
    fallback_locale: Optional[str] = None
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LocaleKitSettings":
        raw_timeout = os.getenv("LOCALEKIT_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ValueError(f"LOCALEKIT_TIMEOUT must be a number, got {raw_timeout!r}") from e
        base_url = os.getenv("LOCALEKIT_BASE_URL", "").strip()
        return cls(
            file_separator=os.getenv("LOCALEKIT_FILE_SEPARATOR") or DEFAULT_FILE_SEPARATOR,
            locale=parse_locale_list(os.getenv("LOCALEKIT_DEFAULT_LOCALE")),
            fallback_locale=os.getenv("LOCALEKIT_FALLBACK_LOCALE", "").strip() or None,
            base_url=base_url.rstrip("/") or None,
            timeout=timeout,
            log_dir=os.getenv("LOCALEKIT_LOG_DIR", "").strip() or None,
        )


__all__ = ["LocaleKitSettings", "parse_locale_list"]
