"""Configuration for the file parts service."""
import os
from functools import lru_cache
from pathlib import Path

from partsplit.config.settings import (
    DEFAULT_SETTINGS_PATH,
    Settings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "Settings",
    "SettingsError",
    "get_settings",
    "load_settings",
]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return settings from ``PARTSPLIT_SETTINGS_FILE`` or ``conf/settings.yaml``.

    Falls back to environment variables and defaults when no file exists.
    """
    override = os.getenv("PARTSPLIT_SETTINGS_FILE")
    if override:
        return load_settings(override)
    if Path(DEFAULT_SETTINGS_PATH).exists():
        return load_settings(DEFAULT_SETTINGS_PATH)
    return Settings()
