"""Wild animal tracker — core internal data models.

These are plain dataclasses with no framework dependencies.
Upstream JSON payloads are converted to/from these at the boundary.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum


class VitalKind(str, Enum):
    HEART_RATE = "heart_rate"
    SPO2 = "spo2"
    BP_SYSTOLIC = "bp_systolic"
    TEMPERATURE = "temperature"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    AT_RISK = "at-risk"
    CRITICAL = "critical"


class AlertSeverity(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


class BoundaryZone(str, Enum):
    SAFE = "safe"
    CAUTION = "caution"
    WARNING = "warning"
    CRITICAL = "critical"


def _number(payload: dict, key: str) -> float:
    """Read a numeric field, treating absent/None/garbage/NaN/inf as 0."""
    raw = payload.get(key)
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


@dataclass(frozen=True)
class TelemetrySample:
    heart_rate_bpm: float = 0.0
    spo2_pct: float = 0.0
    bp_systolic_mmhg: float = 0.0
    bp_diastolic_mmhg: float = 0.0
    core_temp_c: float = 0.0
    surface_temp_c: float = 0.0
    # Upstream "hsurr_pct"; passed through untouched.
    respiratory_pct: float = 0.0
    motion_mps2: float = 0.0
    bp_signal_amplitude: float = 0.0
    struggle_flag: bool = False
    last_update_ms: int = 0

    @classmethod
    def from_payload(cls, payload: dict) -> TelemetrySample:
        """Build a sample from the upstream key schema (hr_bpm, spo2_pct, ...)."""
        return cls(
            heart_rate_bpm=_number(payload, "hr_bpm"),
            spo2_pct=_number(payload, "spo2_pct"),
            bp_systolic_mmhg=_number(payload, "bp_sys"),
            bp_diastolic_mmhg=_number(payload, "bp_dia"),
            core_temp_c=_number(payload, "tcore_c"),
            surface_temp_c=_number(payload, "tsurr_c"),
            respiratory_pct=_number(payload, "hsurr_pct"),
            motion_mps2=_number(payload, "motion_mps2"),
            bp_signal_amplitude=_number(payload, "bpsig_amp"),
            struggle_flag=_number(payload, "struggle_flag") == 1,
            last_update_ms=int(_number(payload, "last_update_ms")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ValueRange:
    """Closed interval [min, max]."""
    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def covers(self, other: ValueRange) -> bool:
        return self.min <= other.min and other.max <= self.max


@dataclass(frozen=True)
class HealthThresholds:
    healthy: ValueRange
    at_risk: ValueRange

    def __post_init__(self) -> None:
        if not self.at_risk.covers(self.healthy):
            raise ValueError(
                f"healthy range {self.healthy} must lie within at-risk range {self.at_risk}"
            )


@dataclass(frozen=True)
class HealthClassification:
    status: HealthStatus
    label: str
    color: str

    def to_dict(self) -> dict:
        return {"status": self.status.value, "label": self.label, "color": self.color}


@dataclass(frozen=True)
class Alert:
    vital_type: str
    value: float
    severity: AlertSeverity
    message: str

    def to_dict(self) -> dict:
        return {
            "vital_type": self.vital_type,
            "value": self.value,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class GeoPoint:
    latitude_deg: float
    longitude_deg: float
    accuracy_m: float | None = None
    timestamp_ms: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BoundaryConfig:
    boundary_radius_km: float = 1.0
    warning_distance_km: float = 0.8
    motion_threshold_mps2: float = 0.5

    def __post_init__(self) -> None:
        if not self.warning_distance_km < self.boundary_radius_km:
            raise ValueError(
                f"warning_distance_km ({self.warning_distance_km}) must be less than "
                f"boundary_radius_km ({self.boundary_radius_km})"
            )


@dataclass(frozen=True)
class BoundaryState:
    zone: BoundaryZone
    distance_km: float
    is_moving: bool
    is_accelerating: bool
    # None in the safe zone: no boundary alert is shown.
    message: str | None = None
    # Sound to request for this update, if any.
    sound: AlertSeverity | None = None

    def to_dict(self) -> dict:
        return {
            "zone": self.zone.value,
            "distance_km": self.distance_km,
            "is_moving": self.is_moving,
            "is_accelerating": self.is_accelerating,
            "message": self.message,
            "sound": self.sound.value if self.sound is not None else None,
        }


@dataclass(frozen=True)
class HistoryPoint:
    timestamp_ms: int
    heart_rate: float
    spo2: float
    bp_sys: float
    bp_dia: float
    temp: float
    respiratory_rate: float

    @classmethod
    def from_sample(cls, sample: TelemetrySample, timestamp_ms: int) -> HistoryPoint:
        return cls(
            timestamp_ms=timestamp_ms,
            heart_rate=sample.heart_rate_bpm,
            spo2=sample.spo2_pct,
            bp_sys=sample.bp_systolic_mmhg,
            bp_dia=sample.bp_diastolic_mmhg,
            temp=sample.core_temp_c,
            respiratory_rate=sample.respiratory_pct,
        )

    def to_dict(self) -> dict:
        return asdict(self)
