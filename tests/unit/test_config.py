"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from nestegg.core.config import AppSettings, ProjectionConfig, StoreConfig


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.default_user_id == "user123"
    assert settings.store.backend == "memory"
    assert settings.api.port == 3001


def test_projection_config_defaults():
    config = ProjectionConfig()
    assert config.default_annual_return == 0.07
    assert config.irs_annual_limit == 23000.0
    assert config.series_compounding == "annual"


def test_store_backend_from_env(monkeypatch):
    monkeypatch.setenv("NESTEGG_STORE_BACKEND", "redis")
    monkeypatch.setenv("NESTEGG_STORE_SEED_DEMO_USER", "false")
    config = StoreConfig()
    assert config.backend == "redis"
    assert config.seed_demo_user is False


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("NESTEGG_LOG_LEVEL", "DEBUG")
    assert AppSettings().log_level == "DEBUG"
