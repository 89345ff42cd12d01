"""
MAPA classification engine.

Pure, synchronous functions over immutable inputs:

    validate_identity(raw)                         -> bool
    classify_blood_pressure(sys, dia, period)      -> BloodPressureClassification
    classify_dipping(percent)                      -> DippingPattern
    classify_pulse_pressure(value)                 -> Label
    classify_hypertensive_load(value)              -> Label
    interpret(study)                               -> List[Statement]
    assemble(patient, study, statements, profile)  -> DiagnosticReport
"""
from .validation import validate_identity
from .clinical import (
    classify_blood_pressure,
    classify_dipping,
    classify_pulse_pressure,
    classify_hypertensive_load,
    interpret,
)
from .reports import assemble

__all__ = [
    "validate_identity",
    "classify_blood_pressure",
    "classify_dipping",
    "classify_pulse_pressure",
    "classify_hypertensive_load",
    "interpret",
    "assemble",
]
