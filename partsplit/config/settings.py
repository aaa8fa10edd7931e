"""Utilities for loading project configuration from ``settings.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from partsplit.libs.file_parts import HASH_ALGORITHMS, ExtraBytesPolicy
from partsplit.libs.file_parts.streams import DEFAULT_CHUNK_SIZE


class SettingsError(RuntimeError):
    """Raised when the settings file is missing or malformed."""


DEFAULT_SETTINGS_PATH = Path("conf/settings.yaml")


class Settings(BaseSettings):
    """Runtime settings, read from ``PARTSPLIT_*`` variables or a YAML file."""

    model_config = SettingsConfigDict(
        env_prefix="PARTSPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "File Parts Service"
    output_dir: Path = Path("output")
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    default_checksum: Optional[str] = None
    extra_bytes: ExtraBytesPolicy = ExtraBytesPolicy.DISTRIBUTE
    log_level: str = "INFO"

    @field_validator("default_checksum")
    @classmethod
    def _known_algorithm(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in HASH_ALGORITHMS:
            raise ValueError(f"unsupported checksum algorithm: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Load configuration from ``settings.yaml`` into a :class:`Settings` object."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path!s}")

    try:
        content = settings_path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem failure
        raise SettingsError(f"Unable to read settings file: {exc}") from exc

    try:
        raw_data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file: {exc}") from exc

    if not isinstance(raw_data, Mapping):
        raise SettingsError("Top-level settings structure must be a mapping")

    normalized: dict[str, Any] = {}
    for key, value in raw_data.items():
        if not isinstance(key, str):
            raise SettingsError("All top-level keys in settings must be strings")
        normalized[key.lower()] = value

    try:
        return Settings(**normalized)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {settings_path!s}: {exc}") from exc
