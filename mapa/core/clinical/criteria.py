"""
Medical criteria table for ambulatory blood-pressure monitoring.

Blood pressure: ESH/AHA ABPM thresholds per averaging window.
Bands are inclusive at the lower edge ("≥") for blood pressure and dipping,
and strict ("> ") for pulse pressure and hypertensive load.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .base import Period


@dataclass(frozen=True)
class BloodPressureThreshold:
    systolic: float          # hypertensive at or above
    diastolic: float         # hypertensive at or above


@dataclass(frozen=True)
class Band:
    min: float
    max: float


@dataclass(frozen=True)
class DippingCriteria:
    extreme: Band
    normal: Band
    reduced: Band
    non_dipper: Band


@dataclass(frozen=True)
class PulsePressureCriteria:
    normal: float            # reference value only
    abnormal: float          # elevated when strictly above


@dataclass(frozen=True)
class HypertensiveLoadCriteria:
    normal: float            # reference value only
    high: float              # elevated when strictly above


@dataclass(frozen=True)
class MedicalCriteria:
    blood_pressure: Mapping[Period, BloodPressureThreshold]
    dipping: DippingCriteria
    pulse_pressure: PulsePressureCriteria
    hypertensive_load: HypertensiveLoadCriteria

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blood_pressure": {
                period.value: {"systolic": t.systolic, "diastolic": t.diastolic}
                for period, t in self.blood_pressure.items()
            },
            "dipping": {
                "extreme": {"min": self.dipping.extreme.min, "max": self.dipping.extreme.max},
                "normal": {"min": self.dipping.normal.min, "max": self.dipping.normal.max},
                "reduced": {"min": self.dipping.reduced.min, "max": self.dipping.reduced.max},
                "non_dipper": {"min": self.dipping.non_dipper.min, "max": self.dipping.non_dipper.max},
            },
            "pulse_pressure": {
                "normal": self.pulse_pressure.normal,
                "abnormal": self.pulse_pressure.abnormal,
            },
            "hypertensive_load": {
                "normal": self.hypertensive_load.normal,
                "high": self.hypertensive_load.high,
            },
        }


MEDICAL_CRITERIA = MedicalCriteria(
    blood_pressure=MappingProxyType({
        Period.H24:   BloodPressureThreshold(systolic=130, diastolic=80),
        Period.DAY:   BloodPressureThreshold(systolic=135, diastolic=85),
        Period.NIGHT: BloodPressureThreshold(systolic=120, diastolic=70),
    }),
    # The normal and extreme bands share the edge at 20; the classifier
    # checks extreme first, so 20 is extreme.
    dipping=DippingCriteria(
        extreme=Band(min=20, max=100),
        normal=Band(min=10, max=20),
        reduced=Band(min=1, max=10),
        non_dipper=Band(min=-100, max=1),
    ),
    pulse_pressure=PulsePressureCriteria(normal=50, abnormal=55),
    hypertensive_load=HypertensiveLoadCriteria(normal=25, high=40),
)
