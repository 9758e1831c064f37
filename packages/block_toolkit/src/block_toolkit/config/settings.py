"""Pydantic models for runtime settings."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel, frozen=True):
    """Runtime configuration loaded from environment variables."""

    locale: str = "en"
    translations_file: str | None = None
    log_level: str = "INFO"
    # Record handler exceptions instead of raising them
    isolate_block_errors: bool = True


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Load settings from environment variables with defaults."""
    load_dotenv()

    locale = os.getenv("BLOCK_TOOLKIT_LOCALE", "en").strip()
    if not locale:
        msg = "BLOCK_TOOLKIT_LOCALE must not be empty when set."
        raise ValueError(msg)

    log_level = os.getenv("BLOCK_TOOLKIT_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        msg = f"BLOCK_TOOLKIT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'."
        raise ValueError(msg)

    translations_file = os.getenv("BLOCK_TOOLKIT_TRANSLATIONS_FILE") or None
    if translations_file is not None and not os.path.isfile(translations_file):
        logger.warning(
            "Translations file %s not found; using default messages", translations_file
        )
        translations_file = None

    return Settings(
        locale=locale,
        translations_file=translations_file,
        log_level=log_level,
        isolate_block_errors=_parse_bool(os.getenv("BLOCK_TOOLKIT_ISOLATE_ERRORS", "true")),
    )
