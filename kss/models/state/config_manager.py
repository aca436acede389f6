"""Settings persistence backed by a YAML file."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from kss.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "KSS_CONFIG_DIR"
PERSONA_ENV = "KSS_PERSONA"
MODEL_ENV = "KSS_MODEL"
SETTINGS_FILENAME = "settings.yaml"


class ConfigManager:
    """Load and save ``AppSettings`` from ``~/.config/kss/settings.yaml``."""

    @staticmethod
    def config_path(environ: Mapping[str, str] | None = None) -> Path:
        env = os.environ if environ is None else environ
        base = env.get(CONFIG_DIR_ENV) or str(Path.home() / ".config" / "kss")
        return Path(base).expanduser() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings, returning defaults when no file exists.

        Raises:
            ConfigLoadError: The file exists but cannot be read or validated.
        """
        settings_path = path or cls.config_path()
        if not settings_path.exists():
            return AppSettings()
        try:
            with settings_path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Cannot read {settings_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"{settings_path} must contain a mapping")
        try:
            return AppSettings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {settings_path}: {exc}") from exc

    @classmethod
    def save(cls, settings: AppSettings, path: Path | None = None) -> Path:
        """Persist settings to disk.

        Raises:
            ConfigSaveError: The file cannot be written.
        """
        settings_path = path or cls.config_path()
        try:
            settings_path.parent.mkdir(parents=True, exist_ok=True)
            with settings_path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(settings.model_dump(), handle, sort_keys=True)
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {settings_path}: {exc}") from exc
        return settings_path

    @staticmethod
    def apply_env_overrides(
        settings: AppSettings, environ: Mapping[str, str] | None = None
    ) -> AppSettings:
        """Return settings with ``KSS_PERSONA`` and ``KSS_MODEL`` applied."""
        env = os.environ if environ is None else environ
        updates: dict[str, str] = {}
        if env.get(PERSONA_ENV):
            updates["persona"] = env[PERSONA_ENV]
        if env.get(MODEL_ENV):
            updates["gemini_model"] = env[MODEL_ENV]
        return settings.model_copy(update=updates) if updates else settings

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> AppSettings:
        """Load settings with env overrides, falling back to defaults on error."""
        try:
            settings = cls.load(path)
        except ConfigError as exc:
            logger.warning("Using default settings: %s", exc)
            settings = AppSettings()
        return cls.apply_env_overrides(settings)
