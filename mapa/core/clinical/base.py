"""
Clinical Classification — Base Types

Data contracts produced by the threshold classifier and the diagnostic
interpreter. These are consumed by the report assembler and the API layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Period(str, Enum):
    """Averaging window of an ambulatory blood-pressure study."""
    H24   = "24h"
    DAY   = "day"
    NIGHT = "night"


class Label(str, Enum):
    """Category labels for blood pressure, pulse pressure and load."""
    HYPERTENSION = "Hypertension"
    NORMAL       = "Normal"
    ELEVATED     = "Elevated"


class DippingPattern(str, Enum):
    """
    Nocturnal dipping category.

    EXTREME   – fall ≥ 20 %
    NORMAL    – fall 10–20 %
    REDUCED   – fall 1–10 %
    NON_DIPPER – fall < 1 % (includes reverse dippers)
    """
    EXTREME    = "Extreme dipper"
    NORMAL     = "Normal dipper"
    REDUCED    = "Reduced dipper"
    NON_DIPPER = "Non-dipper"


class StatementCategory(str, Enum):
    """Section of the diagnostic interpretation a statement belongs to."""
    BLOOD_PRESSURE    = "blood_pressure"
    CIRCADIAN_PATTERN = "circadian_pattern"
    PULSE_PRESSURE    = "pulse_pressure"
    HYPERTENSIVE_LOAD = "hypertensive_load"


@dataclass(frozen=True)
class BloodPressureClassification:
    """Result of classifying one period average."""
    period: Period
    is_hypertensive: bool
    label: Label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period.value,
            "is_hypertensive": self.is_hypertensive,
            "label": self.label.value,
        }


@dataclass(frozen=True)
class StudyClassification:
    """Every per-dimension classification for one study."""
    bp_24h: BloodPressureClassification
    bp_day: BloodPressureClassification
    bp_night: BloodPressureClassification
    dipping_sys: Optional[DippingPattern] = None
    dipping_dia: Optional[DippingPattern] = None
    pulse_pressure: Optional[Label] = None
    load_sys: Optional[Label] = None
    load_dia: Optional[Label] = None

    @property
    def hypertensive_periods(self) -> tuple:
        """Flagged periods in fixed 24h → day → night order."""
        return tuple(
            bp.period for bp in (self.bp_24h, self.bp_day, self.bp_night)
            if bp.is_hypertensive
        )

    @property
    def is_hypertensive(self) -> bool:
        return bool(self.hypertensive_periods)

    @property
    def load_elevated(self) -> bool:
        return Label.ELEVATED in (self.load_sys, self.load_dia)

    def to_dict(self) -> Dict[str, Any]:
        def _value(item):
            return item.value if item is not None else None

        return {
            "blood_pressure": {
                "24h": self.bp_24h.to_dict(),
                "day": self.bp_day.to_dict(),
                "night": self.bp_night.to_dict(),
            },
            "dipping_sys": _value(self.dipping_sys),
            "dipping_dia": _value(self.dipping_dia),
            "pulse_pressure": _value(self.pulse_pressure),
            "load_sys": _value(self.load_sys),
            "load_dia": _value(self.load_dia),
        }


@dataclass(frozen=True)
class Statement:
    """
    One line of the diagnostic interpretation.

    Plain structured text; markup is the renderer's business.
    `is_detail` marks the per-period lines that follow the hypertension
    headline.
    """
    category: StatementCategory
    code: str                 # e.g. "BP-HTN-001"
    message: str
    is_detail: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "code": self.code,
            "message": self.message,
            "is_detail": self.is_detail,
        }
