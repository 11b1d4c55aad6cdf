from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import LocaleKitSettings

LOGGER_NAME = "localekit"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _has_console_handler(logger: logging.Logger) -> bool:
    # FileHandler subclasses StreamHandler
    return any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )


def _has_file_handler(logger: logging.Logger, log_path: Path) -> bool:
    target = os.path.abspath(log_path)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def setup_logging(
    settings: Optional[LocaleKitSettings] = None,
    *,
    verbose: bool = False,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Attach console and optional file output to the package logger.

    The console only shows warnings unless ``verbose`` is set. When
    ``settings.log_dir`` is configured every record down to DEBUG also goes
    to ``<log_dir>/<name>.log``. Calling this again does not duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    if _has_console_handler(logger):
        for handler in logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    else:
        console = logging.StreamHandler()
        console.setLevel(logging.DEBUG if verbose else logging.WARNING)
        console.setFormatter(formatter)
        logger.addHandler(console)

    log_dir = settings.log_dir if settings is not None else None
    if log_dir:
        log_path = Path(log_dir).expanduser() / f"{name}.log"
        if not _has_file_handler(logger, log_path):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug(f"Writing logs to {log_path}")

    return logger


__all__ = ["setup_logging", "LOGGER_NAME", "LOG_FORMAT"]
