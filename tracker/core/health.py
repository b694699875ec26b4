"""Vital-sign health classification and alert derivation.

Both functions are pure: they take a value or a snapshot and return derived
data, with no state and no logging.
"""

from __future__ import annotations

from tracker.core.models import (
    Alert,
    AlertSeverity,
    HealthClassification,
    HealthStatus,
    HealthThresholds,
    TelemetrySample,
    ValueRange,
    VitalKind,
)

# Below/above at-risk = critical. SpO2 has no upper at-risk band; 100% is the
# ceiling, so its at-risk range simply extends up to it.
HEALTH_THRESHOLDS: dict[VitalKind, HealthThresholds] = {
    VitalKind.HEART_RATE: HealthThresholds(
        healthy=ValueRange(60, 100), at_risk=ValueRange(45, 130),
    ),
    VitalKind.SPO2: HealthThresholds(
        healthy=ValueRange(95, 100), at_risk=ValueRange(90, 100),
    ),
    VitalKind.BP_SYSTOLIC: HealthThresholds(
        healthy=ValueRange(110, 140), at_risk=ValueRange(90, 160),
    ),
    VitalKind.TEMPERATURE: HealthThresholds(
        healthy=ValueRange(36.5, 38.5), at_risk=ValueRange(35.5, 39.5),
    ),
}

HEALTHY = HealthClassification(HealthStatus.HEALTHY, "Healthy", "#4caf50")
AT_RISK = HealthClassification(HealthStatus.AT_RISK, "At Risk", "#ff9800")
CRITICAL = HealthClassification(HealthStatus.CRITICAL, "Critical", "#f44336")

# (kind, display name, sample attribute, critical message, warning message),
# in alert order.
_VITALS: tuple[tuple[VitalKind, str, str, str, str], ...] = (
    (VitalKind.HEART_RATE, "Heart Rate", "heart_rate_bpm",
     "Critical heart rate detected!", "Heart rate at risk level"),
    (VitalKind.SPO2, "SpO2", "spo2_pct",
     "Critical oxygen saturation!", "Low oxygen saturation"),
    (VitalKind.BP_SYSTOLIC, "Blood Pressure", "bp_systolic_mmhg",
     "Critical blood pressure!", "Blood pressure abnormal"),
    (VitalKind.TEMPERATURE, "Temperature", "core_temp_c",
     "Critical temperature level!", "Temperature abnormal"),
)


def classify(value: float, kind: VitalKind) -> HealthClassification:
    """Map a vital-sign value to healthy / at-risk / critical.

    The healthy range is checked first, so at-risk only fires for values
    inside the at-risk range but outside the healthy one. Any real number is
    accepted.
    """
    thresholds = HEALTH_THRESHOLDS[kind]
    if thresholds.healthy.contains(value):
        return HEALTHY
    if thresholds.at_risk.contains(value):
        return AT_RISK
    return CRITICAL


def classify_vitals(sample: TelemetrySample) -> dict[VitalKind, HealthClassification]:
    """Classify the four primary vitals of a snapshot, in alert order."""
    return {
        kind: classify(getattr(sample, attr), kind)
        for kind, _name, attr, _crit, _warn in _VITALS
    }


def derive_alerts(sample: TelemetrySample) -> list[Alert]:
    """Return the active alerts for a snapshot.

    Order is fixed: heart rate, SpO2, blood pressure, temperature. Every
    non-healthy vital yields one alert; secondary fields never do.
    """
    alerts: list[Alert] = []
    for kind, name, attr, critical_msg, warning_msg in _VITALS:
        value = getattr(sample, attr)
        status = classify(value, kind).status
        if status is HealthStatus.CRITICAL:
            alerts.append(Alert(name, value, AlertSeverity.CRITICAL, critical_msg))
        elif status is HealthStatus.AT_RISK:
            alerts.append(Alert(name, value, AlertSeverity.WARNING, warning_msg))
    return alerts
