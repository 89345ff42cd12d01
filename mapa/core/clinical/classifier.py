"""
Threshold Classifier

Classifies study measurements against MEDICAL_CRITERIA.

Every classifier is total over real numbers: physiologically implausible
values (negative, huge, NaN) are classified literally by the bands and
never rejected here. Range checks belong to the intake layer.

Dipping precedence (must not be reordered):
    1. Extreme dipper: ≥ 20
    2. Normal dipper : 10 to 20 inclusive
    3. Reduced dipper: 1 to < 10
    4. Non-dipper    : everything else
"""
from __future__ import annotations

from typing import Optional, Union, TYPE_CHECKING

from .base import (
    BloodPressureClassification,
    DippingPattern,
    Label,
    Period,
    StudyClassification,
)
from .criteria import MEDICAL_CRITERIA

if TYPE_CHECKING:
    from mapa.core.domain.study import StudyMeasurement


def classify_blood_pressure(
    systolic: float,
    diastolic: float,
    period: Union[Period, str],
) -> BloodPressureClassification:
    """
    Hypertensive if systolic OR diastolic meets its period threshold.

    A single elevated component is sufficient. `period` accepts the enum
    or its string value ("24h", "day", "night").
    """
    period = Period(period)
    threshold = MEDICAL_CRITERIA.blood_pressure[period]

    is_hypertensive = systolic >= threshold.systolic or diastolic >= threshold.diastolic
    return BloodPressureClassification(
        period=period,
        is_hypertensive=is_hypertensive,
        label=Label.HYPERTENSION if is_hypertensive else Label.NORMAL,
    )


def classify_dipping(percent: float) -> DippingPattern:
    criteria = MEDICAL_CRITERIA.dipping

    if percent >= criteria.extreme.min:
        return DippingPattern.EXTREME
    if criteria.normal.min <= percent <= criteria.normal.max:
        return DippingPattern.NORMAL
    if criteria.reduced.min <= percent < criteria.normal.min:
        return DippingPattern.REDUCED
    return DippingPattern.NON_DIPPER


def classify_pulse_pressure(value: float) -> Label:
    if value > MEDICAL_CRITERIA.pulse_pressure.abnormal:
        return Label.ELEVATED
    return Label.NORMAL


def classify_hypertensive_load(value: float) -> Label:
    """Apply separately to the systolic and the diastolic load."""
    if value > MEDICAL_CRITERIA.hypertensive_load.high:
        return Label.ELEVATED
    return Label.NORMAL


def _optional(classifier, value: Optional[float]):
    return None if value is None else classifier(value)


def classify_study(study: "StudyMeasurement") -> StudyClassification:
    """
    Run every classifier for one study.

    Optional measurements that were not recorded classify to None.
    Assumes the mandatory averages are present (StudyBuilder guarantees it).
    """
    return StudyClassification(
        bp_24h=classify_blood_pressure(study.avg_24h_sys, study.avg_24h_dia, Period.H24),
        bp_day=classify_blood_pressure(study.avg_day_sys, study.avg_day_dia, Period.DAY),
        bp_night=classify_blood_pressure(study.avg_night_sys, study.avg_night_dia, Period.NIGHT),
        dipping_sys=_optional(classify_dipping, study.dipping_sys),
        dipping_dia=_optional(classify_dipping, study.dipping_dia),
        pulse_pressure=_optional(classify_pulse_pressure, study.pulse_pressure),
        load_sys=_optional(classify_hypertensive_load, study.load_sys),
        load_dia=_optional(classify_hypertensive_load, study.load_dia),
    )
