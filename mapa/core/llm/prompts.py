"""
Prompt templates for the AI narrative of a MAPA study.

The prompt carries the already-measured values and the same diagnostic
criteria the deterministic classifier uses, so both branches speak about
the same thresholds.
"""
from __future__ import annotations

from typing import Optional

from mapa.core.clinical.criteria import MEDICAL_CRITERIA
from mapa.core.clinical.base import Period
from mapa.core.domain.patient import Patient
from mapa.core.domain.study import StudyMeasurement

SYSTEM_INSTRUCTION = (
    "You are a cardiologist specialised in arterial hypertension and "
    "ambulatory blood-pressure monitoring (ABPM/MAPA). Provide precise, "
    "professional medical analysis based on current international guidelines."
)


def _value(value: Optional[float], unit: str = "") -> str:
    if value is None:
        return "not recorded"
    return f"{value:g}{unit}"


def _criteria_block() -> str:
    bp = MEDICAL_CRITERIA.blood_pressure
    dipping = MEDICAL_CRITERIA.dipping
    h24, day, night = bp[Period.H24], bp[Period.DAY], bp[Period.NIGHT]
    return (
        f"- Normal 24h: <{h24.systolic:g}/{h24.diastolic:g} mmHg\n"
        f"- Normal daytime: <{day.systolic:g}/{day.diastolic:g} mmHg\n"
        f"- Normal nighttime: <{night.systolic:g}/{night.diastolic:g} mmHg\n"
        f"- Normal dipping: {dipping.normal.min:g}-{dipping.normal.max:g}%\n"
        f"- Normal pulse pressure: <{MEDICAL_CRITERIA.pulse_pressure.normal:g} mmHg"
    )


def build_analysis_prompt(patient: Patient, study: StudyMeasurement) -> str:
    """User prompt for one patient's study."""
    return f"""Analyse the following 24-hour ambulatory blood-pressure monitoring (MAPA) data:

PATIENT DATA:
- Age: {patient.age} years
- Sex: {patient.sex.value}
- Diseases: {patient.diseases or 'None reported'}
- Medications: {patient.medications or 'None reported'}

MAPA STUDY DATA:
- 24h average: {study.avg_24h_sys:g}/{study.avg_24h_dia:g} mmHg
- Daytime average: {study.avg_day_sys:g}/{study.avg_day_dia:g} mmHg
- Nighttime average: {study.avg_night_sys:g}/{study.avg_night_dia:g} mmHg
- Systolic dipping: {_value(study.dipping_sys, '%')}
- Diastolic dipping: {_value(study.dipping_dia, '%')}
- Systolic hypertensive load: {_value(study.load_sys, '%')}
- Diastolic hypertensive load: {_value(study.load_dia, '%')}
- Pulse pressure: {_value(study.pulse_pressure, ' mmHg')}
- Average heart rate: {_value(study.avg_heart_rate, ' bpm')}

DIAGNOSTIC CRITERIA:
{_criteria_block()}

Provide a detailed medical analysis including:
1. Diagnostic classification according to international criteria
2. Evaluation of the circadian pattern
3. Cardiovascular risk analysis
4. Therapeutic recommendations
5. Suggested follow-up

Use medical terminology appropriate for a professional report."""
