"""
Тесты конфигурации: сохранение настроек и приоритет переменной окружения.
"""

import json
import os
import tempfile

import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from expense_tracker.config import API_URL_ENV_VAR, Config

FILE_URL = "http://file.example/api"
ENV_URL = "http://staging.example/api"


@pytest.fixture
def config(tmp_path, monkeypatch):
    """Singleton с конфигурацией во временном файле; атрибуты восстанавливаются после теста."""
    cfg = Config()
    monkeypatch.setattr(cfg, "config_file", str(tmp_path / "config.json"))
    monkeypatch.setattr(cfg, "api_base_url", FILE_URL)
    monkeypatch.setattr(cfg, "_file_api_base_url", FILE_URL)
    monkeypatch.setattr(cfg, "_env_api_base_url", None)
    monkeypatch.setattr(cfg, "last_route", "/dashboard")
    monkeypatch.delenv(API_URL_ENV_VAR, raising=False)
    return cfg


def _saved(cfg) -> dict:
    with open(cfg.config_file, encoding="utf-8") as f:
        return json.load(f)


def test_config_singleton():
    assert Config() is Config()


def test_env_var_overrides_api_url(config, monkeypatch):
    monkeypatch.setenv(API_URL_ENV_VAR, ENV_URL)

    config._apply_env_overrides()

    assert config.api_base_url == ENV_URL


def test_env_override_not_written_to_file(config, monkeypatch):
    monkeypatch.setenv(API_URL_ENV_VAR, ENV_URL)
    config._apply_env_overrides()

    config.last_route = "/income"
    config.save()

    data = _saved(config)
    assert data["api_base_url"] == FILE_URL
    assert data["last_route"] == "/income"


def test_file_url_restored_after_env_var_removed(config, monkeypatch):
    monkeypatch.setenv(API_URL_ENV_VAR, ENV_URL)
    config._apply_env_overrides()
    config.save()

    monkeypatch.delenv(API_URL_ENV_VAR)
    config.load()
    config._apply_env_overrides()

    assert config.api_base_url == FILE_URL


def test_explicit_url_change_is_saved(config, monkeypatch):
    monkeypatch.setenv(API_URL_ENV_VAR, ENV_URL)
    config._apply_env_overrides()

    config.api_base_url = "http://other.example/api"
    config.save()

    assert _saved(config)["api_base_url"] == "http://other.example/api"


@given(
    theme=st.sampled_from(["light", "dark"]),
    route=st.sampled_from(["/dashboard", "/income", "/expense", "/inventory", "/reports"]),
    timeout=st.floats(min_value=1, max_value=120, allow_nan=False),
)
@hypothesis_settings(max_examples=20, deadline=None)
def test_settings_persistence(theme, route, timeout):
    """
    Property 52: Персистентность основных настроек (тема, маршрут, таймаут).
    Feature: Settings
    """
    cfg = Config()
    saved = (cfg.config_file, cfg.theme_mode, cfg.last_route, cfg.request_timeout)
    tmp_dir = tempfile.mkdtemp()
    cfg.config_file = os.path.join(tmp_dir, "settings.json")
    try:
        cfg.theme_mode = theme
        cfg.last_route = route
        cfg.request_timeout = timeout
        cfg.save()

        cfg.theme_mode = "system"
        cfg.last_route = "/"
        cfg.request_timeout = 0.0
        cfg.load()

        assert cfg.theme_mode == theme
        assert cfg.last_route == route
        assert cfg.request_timeout == timeout
    finally:
        cfg.config_file, cfg.theme_mode, cfg.last_route, cfg.request_timeout = saved
