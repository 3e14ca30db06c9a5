"""Tests for YAML settings loading."""
from __future__ import annotations

import logging

from clearvest.config_loader import CONFIG_ENV_VAR, Settings, load_settings


def test_defaults_without_config(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)

    assert load_settings() == Settings()


def test_explicit_path_overrides_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("growth_rate: 0.05\nforecast_years: 10\ncors_origins:\n  - http://localhost:3000\n")

    settings = load_settings(path)

    assert settings.growth_rate == 0.05
    assert settings.forecast_years == 10
    assert settings.cors_origins == ["http://localhost:3000"]
    assert settings.optimized_cost_rate == Settings().optimized_cost_rate


def test_env_var_path(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("export_basename: my-export\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_settings().export_basename == "my-export"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert load_settings(path) == Settings()


def test_unknown_keys_are_ignored_with_warning(tmp_path, caplog):
    path = tmp_path / "extra.yaml"
    path.write_text("log_level: DEBUG\nunknown_knob: 1\n")

    with caplog.at_level(logging.WARNING, logger="clearvest.config_loader"):
        settings = load_settings(path)

    assert settings.log_level == "DEBUG"
    assert "unknown_knob" in caplog.text
