"""Settings loading from YAML files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from hubpulse.constants.values import CONFIG_ENV_VAR
from hubpulse.models.state.app_settings import AppSettings, ConfigLoadError

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads AppSettings from a YAML file.

    The path comes from the caller or the ``HUBPULSE_CONFIG`` environment
    variable. A missing file yields default settings.
    """

    @staticmethod
    def resolve_path(path: str | Path | None = None) -> Path | None:
        if path is not None:
            return Path(path).expanduser()
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            return Path(env_path).expanduser()
        return None

    @classmethod
    def load(cls, path: str | Path | None = None) -> AppSettings:
        """Load settings.

        Raises:
            ConfigLoadError: If the file cannot be read, is not valid YAML,
                or fails validation.
        """
        config_path = cls.resolve_path(path)
        if config_path is None or not config_path.exists():
            logger.debug("No settings file found, using defaults")
            return AppSettings()

        try:
            raw_text = config_path.read_text(encoding="utf-8")
            payload: Any = yaml.safe_load(raw_text) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Failed to read settings from {config_path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise ConfigLoadError(f"Settings file {config_path} must contain a mapping")

        try:
            settings = AppSettings.model_validate(payload)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {config_path}: {exc}") from exc

        logger.info("Loaded settings from %s", config_path)
        return settings
