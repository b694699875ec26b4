"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from tracker.config import AppConfig, load_config


def test_defaults(tmp_path):
    config = load_config(tmp_path / "missing.yaml")
    assert config.boundary.radius_km == 1.0
    assert config.boundary.warning_distance_km == 0.8
    assert config.history.max_points == 20
    assert config.logging.format == "console"

    boundary = config.boundary_config()
    assert boundary.boundary_radius_km == 1.0
    assert boundary.motion_threshold_mps2 == 0.5


def test_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "boundary:\n"
        "  radius_km: 2.5\n"
        "  warning_distance_km: 2.0\n"
        "  unknown_key: 1\n"
        "history:\n"
        "  max_points: 50\n"
        "logging:\n"
        "  format: json\n"
    )
    config = load_config(path)
    assert config.boundary.radius_km == 2.5
    assert config.boundary.warning_distance_km == 2.0
    assert not hasattr(config.boundary, "unknown_key")
    assert config.history.max_points == 50
    assert config.logging.format == "json"


def test_env_overrides_win(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("boundary:\n  radius_km: 2.5\n")
    monkeypatch.setenv("TRACK_BOUNDARY_RADIUS_KM", "3.0")
    monkeypatch.setenv("TRACK_HISTORY_MAX_POINTS", "10")
    monkeypatch.setenv("TRACK_LOG_LEVEL", "debug")

    config = load_config(path)
    assert config.boundary.radius_km == 3.0
    assert config.history.max_points == 10
    assert config.logging.level == "debug"


def test_invalid_boundary_rejected():
    config = AppConfig()
    config.boundary.warning_distance_km = 1.5
    with pytest.raises(ValueError):
        config.boundary_config()
