"""
Clinical Classification Layer

Fixed-threshold classification of MAPA measurements and the diagnostic
interpretation built from it.

Usage:
    from mapa.core.clinical import classify_blood_pressure, interpret

    classify_blood_pressure(130, 79, "24h").is_hypertensive   # True
    statements = interpret(study)
"""
from .base import (
    BloodPressureClassification,
    DippingPattern,
    Label,
    Period,
    Statement,
    StatementCategory,
    StudyClassification,
)
from .criteria import MEDICAL_CRITERIA
from .classifier import (
    classify_blood_pressure,
    classify_dipping,
    classify_pulse_pressure,
    classify_hypertensive_load,
    classify_study,
)
from .interpreter import DiagnosticInterpreter, interpret

__all__ = [
    "BloodPressureClassification",
    "DippingPattern",
    "Label",
    "Period",
    "Statement",
    "StatementCategory",
    "StudyClassification",
    "MEDICAL_CRITERIA",
    "classify_blood_pressure",
    "classify_dipping",
    "classify_pulse_pressure",
    "classify_hypertensive_load",
    "classify_study",
    "DiagnosticInterpreter",
    "interpret",
]
