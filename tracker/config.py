"""Tracker configuration.

Loads from config.yaml if present, with environment variable overrides.
Environment variables use the pattern: TRACK_<SECTION>_<KEY> (uppercase).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from tracker.core.models import BoundaryConfig


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    env: str = "dev"  # "dev" or "prod"


@dataclass
class BoundarySection:
    radius_km: float = 1.0
    warning_distance_km: float = 0.8
    motion_threshold_mps2: float = 0.5


@dataclass
class HistorySection:
    max_points: int = 20


@dataclass
class LoggingConfig:
    level: str = "info"
    format: str = "console"  # "console" or "json"
    file: str = ""


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    boundary: BoundarySection = field(default_factory=BoundarySection)
    history: HistorySection = field(default_factory=HistorySection)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def boundary_config(self) -> BoundaryConfig:
        """Build the validated BoundaryConfig. Raises ValueError if inconsistent."""
        return BoundaryConfig(
            boundary_radius_km=float(self.boundary.radius_km),
            warning_distance_km=float(self.boundary.warning_distance_km),
            motion_threshold_mps2=float(self.boundary.motion_threshold_mps2),
        )


def _apply_env_overrides(config: AppConfig) -> None:
    """Override config values from environment variables."""
    mapping = {
        "TRACK_SERVER_HOST": lambda v: setattr(config.server, "host", v),
        "TRACK_SERVER_PORT": lambda v: setattr(config.server, "port", int(v)),
        "TRACK_SERVER_ENV": lambda v: setattr(config.server, "env", v),
        "TRACK_BOUNDARY_RADIUS_KM": lambda v: setattr(config.boundary, "radius_km", float(v)),
        "TRACK_BOUNDARY_WARNING_DISTANCE_KM":
            lambda v: setattr(config.boundary, "warning_distance_km", float(v)),
        "TRACK_BOUNDARY_MOTION_THRESHOLD":
            lambda v: setattr(config.boundary, "motion_threshold_mps2", float(v)),
        "TRACK_HISTORY_MAX_POINTS": lambda v: setattr(config.history, "max_points", int(v)),
        "TRACK_LOG_LEVEL": lambda v: setattr(config.logging, "level", v),
        "TRACK_LOG_FORMAT": lambda v: setattr(config.logging, "format", v),
        "TRACK_LOG_FILE": lambda v: setattr(config.logging, "file", v),
    }
    for env_key, setter in mapping.items():
        val = os.environ.get(env_key)
        if val is not None:
            setter(val)


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load configuration from YAML file + environment overrides."""
    config = AppConfig()

    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

        for section in ("server", "boundary", "history", "logging"):
            target = getattr(config, section)
            for k, v in (raw.get(section) or {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)

    # Environment overrides always win
    _apply_env_overrides(config)
    return config
