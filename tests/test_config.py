"""Tests for configuration manager."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from recipe_explorer.config.manager import API_KEY_ENV, IMAGE_KEY_ENV, ConfigManager


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    monkeypatch.delenv(IMAGE_KEY_ENV, raising=False)


def test_config_manager_loads_defaults(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    manager = ConfigManager(config_path=config_dir / "config.json")

    assert manager.config.default_language == "en"
    assert manager.config.api.endpoint.startswith("https://")
    assert manager.config.cache.max_records == 100
    assert manager.config.cache.expiry_seconds == 1800
    assert manager.config.search.generated_count == 6
    assert (config_dir / "config.json").exists()


def test_environment_credentials_override_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(API_KEY_ENV, "env-llm-key")
    monkeypatch.setenv(IMAGE_KEY_ENV, "env-photo-key")

    manager = ConfigManager(config_path=tmp_path / "config.json")

    assert manager.config.api.api_key == "env-llm-key"
    assert manager.config.images.access_key == "env-photo-key"
    stored = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert stored["api"]["api_key"] is None
    assert stored["images"]["access_key"] is None


def test_credentials_are_hidden_from_repr() -> None:
    from recipe_explorer.config.schemas import ApiConfig

    assert "secret" not in repr(ApiConfig(api_key="secret"))
