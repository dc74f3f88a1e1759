"""Configuration manager for Recipe Explorer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .schemas import AppConfig

API_KEY_ENV = "RECIPE_EXPLORER_API_KEY"
IMAGE_KEY_ENV = "UNSPLASH_ACCESS_KEY"


@dataclass
class ConfigManager:
    """Load, manage, and persist application configuration.

    Credentials found in the environment take precedence over the file but are
    never written back to it.
    """

    config_path: Path = field(default_factory=lambda: Path.home() / ".recipe_explorer" / "config.json")
    _stored: AppConfig = field(init=False)
    _config: AppConfig = field(init=False)

    def __post_init__(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self._stored = self._load_or_default()
        self._config = self._with_env_credentials(self._stored)

    @property
    def config(self) -> AppConfig:
        """Return the current configuration model."""
        return self._config

    def update(self, **kwargs: Any) -> None:
        """Update configuration fields and persist to disk."""
        self._stored = self._stored.model_copy(update=kwargs)
        self._config = self._with_env_credentials(self._stored)
        self.save()

    def save(self) -> None:
        """Persist configuration to disk."""
        self.config_path.write_text(self._stored.model_dump_json(indent=2), encoding="utf-8")

    def _load_or_default(self) -> AppConfig:
        if self.config_path.exists():
            return AppConfig.model_validate_json(self.config_path.read_text(encoding="utf-8"))
        config = AppConfig()
        self.config_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        return config

    @staticmethod
    def _with_env_credentials(config: AppConfig) -> AppConfig:
        api_key = os.environ.get(API_KEY_ENV)
        access_key = os.environ.get(IMAGE_KEY_ENV)
        update: dict[str, Any] = {}
        if api_key:
            update["api"] = config.api.model_copy(update={"api_key": api_key})
        if access_key:
            update["images"] = config.images.model_copy(update={"access_key": access_key})
        return config.model_copy(update=update) if update else config
