from __future__ import annotations

import locale
import os
from typing import Optional

LOCALE_ENV_VARS = ("LOCALEKIT_LOCALE", "LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")
DEFAULT_LOCALE = "en"


def normalize_locale(raw: str) -> Optional[str]:
    """Turn values like ``en_US.UTF-8`` or ``pt-br`` into ``en-US`` / ``pt-BR``."""
    value = (raw or "").strip()
    # LANGUAGE may hold a colon separated priority list
    value = value.split(":")[0]
    value = value.split(".")[0].split("@")[0]
    if not value or value in {"C", "POSIX"}:
        return None
    parts = value.replace("_", "-").split("-")
    lang = parts[0].lower()
    if not lang.isalpha() or len(lang) < 2:
        return None
    if len(parts) > 1 and parts[1]:
        return f"{lang}-{parts[1].upper()}"
    return lang


def detect_platform_locale() -> str:
    for var in LOCALE_ENV_VARS:
        detected = normalize_locale(os.environ.get(var, ""))
        if detected:
            return detected
    try:
        detected = normalize_locale(locale.getlocale()[0] or "")
    except ValueError:
        detected = None
    return detected or DEFAULT_LOCALE


__all__ = ["normalize_locale", "detect_platform_locale", "LOCALE_ENV_VARS", "DEFAULT_LOCALE"]
