"""Tests for application configuration and settings.

This module contains unit tests for the Settings Pydantic model in
sikyon.core.config. It ensures that default values, environment overrides,
layer file lookup and get_settings caching work as expected.
"""

from __future__ import annotations

import pathlib

import pytest

from sikyon.core import config


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that Settings has expected default values."""
    for name in ("DATA_DIR", "LAYER_CONFIG_FILE", "ALLOW_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = config.Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.data_dir == pathlib.Path("public/data")
    assert settings.layer_file_suffixes == [".geojson"]
    assert settings.layer_config_file is None
    assert settings.allow_origins == ["http://localhost:3100"]
    assert settings.log_level == "INFO"


def test_settings_from_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path
) -> None:
    """Environment variables override defaults, case-insensitively."""
    monkeypatch.setenv("data_dir", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = config.Settings()
    assert settings.data_dir == tmp_path
    assert settings.log_level == "DEBUG"


def test_layer_path_uses_suffix_order(tmp_path: pathlib.Path) -> None:
    (tmp_path / "pottery.json").write_text("{}")
    (tmp_path / "pottery.geojson").write_text("{}")
    settings = config.Settings(
        data_dir=tmp_path, layer_file_suffixes=[".geojson", ".json"]
    )
    assert settings.layer_path("pottery") == tmp_path / "pottery.geojson"
    (tmp_path / "pottery.geojson").unlink()
    assert settings.layer_path("pottery") == tmp_path / "pottery.json"


@pytest.mark.parametrize("layer_id", ["", "missing", "../pottery", "a/b"])
def test_layer_path_rejects_unknown_ids(
    tmp_path: pathlib.Path, layer_id: str
) -> None:
    (tmp_path / "pottery.geojson").write_text("{}")
    settings = config.Settings(data_dir=tmp_path / "sub")
    assert settings.layer_path(layer_id) is None


def test_get_settings_cached() -> None:
    """Test that get_settings returns cached instance."""
    config.get_settings.cache_clear()
    settings1 = config.get_settings()
    settings2 = config.get_settings()
    assert settings1 is settings2
    config.get_settings.cache_clear()
