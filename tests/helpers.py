"""Test doubles and builders shared across test modules."""

from __future__ import annotations

from tracker.core.models import AlertSeverity, GeoPoint, TelemetrySample


class RecordingSoundPlayer:
    """SoundPlayer that remembers every request."""

    def __init__(self) -> None:
        self.played: list[AlertSeverity] = []

    def play(self, severity: AlertSeverity) -> None:
        self.played.append(severity)


class BrokenSoundPlayer:
    """SoundPlayer whose audio backend always fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def play(self, severity: AlertSeverity) -> None:
        self.attempts += 1
        raise RuntimeError("audio device unavailable")


def fix(lat: float, lon: float, timestamp_ms: int = 0) -> GeoPoint:
    return GeoPoint(latitude_deg=lat, longitude_deg=lon, timestamp_ms=timestamp_ms)


def healthy_sample(**overrides) -> TelemetrySample:
    values = dict(
        heart_rate_bpm=75, spo2_pct=98, bp_systolic_mmhg=120, bp_diastolic_mmhg=80,
        core_temp_c=37.5, surface_temp_c=33.0, respiratory_pct=40.0,
        motion_mps2=0.0, bp_signal_amplitude=1.0,
    )
    values.update(overrides)
    return TelemetrySample(**values)
