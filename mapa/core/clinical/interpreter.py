"""
Diagnostic Interpreter

Turns one study into the ordered list of diagnostic statements printed in
the "diagnostic interpretation" section of a MAPA report.

Rule ordering (fixed, one pass, no retries):
    1. Blood pressure   : hypertension confirmed + flagged periods, or normal
    2. Circadian pattern: driven by systolic dipping only
    3. Pulse pressure   : only when elevated
    4. Hypertensive load: once, when either load is elevated

Usage:
    from mapa.core.clinical import interpret

    for statement in interpret(study):
        print(statement.category.value, statement.message)
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence, TYPE_CHECKING

from .base import (
    DippingPattern,
    Label,
    Period,
    Statement,
    StatementCategory,
    StudyClassification,
)
from .classifier import classify_study
from .criteria import MEDICAL_CRITERIA

if TYPE_CHECKING:
    from mapa.core.domain.study import StudyMeasurement

_PERIOD_WORDING = {
    Period.H24:   ("BP-HTN-24H", "Hypertension on the 24-hour average"),
    Period.DAY:   ("BP-HTN-DAY", "Daytime hypertension"),
    Period.NIGHT: ("BP-HTN-NIGHT", "Nighttime hypertension"),
}


def _fmt(value: float) -> str:
    return f"{value:g}"


def _period_values(study: "StudyMeasurement", period: Period) -> str:
    pairs = {
        Period.H24:   (study.avg_24h_sys, study.avg_24h_dia),
        Period.DAY:   (study.avg_day_sys, study.avg_day_dia),
        Period.NIGHT: (study.avg_night_sys, study.avg_night_dia),
    }
    sys_value, dia_value = pairs[period]
    threshold = MEDICAL_CRITERIA.blood_pressure[period]
    return (
        f"{_fmt(sys_value)}/{_fmt(dia_value)} mmHg, "
        f"threshold {_fmt(threshold.systolic)}/{_fmt(threshold.diastolic)} mmHg"
    )


# ── Rule 1: Blood pressure ───────────────────────────────────────────────────

def rule_blood_pressure(
    study: "StudyMeasurement", classification: StudyClassification
) -> List[Statement]:
    if not classification.is_hypertensive:
        return [Statement(
            category=StatementCategory.BLOOD_PRESSURE,
            code="BP-NORM-001",
            message="Normal blood pressure according to ABPM criteria.",
        )]

    statements = [Statement(
        category=StatementCategory.BLOOD_PRESSURE,
        code="BP-HTN-001",
        message="Hypertension confirmed by ambulatory blood-pressure monitoring.",
    )]
    for period in classification.hypertensive_periods:
        code, wording = _PERIOD_WORDING[period]
        statements.append(Statement(
            category=StatementCategory.BLOOD_PRESSURE,
            code=code,
            message=f"{wording} ({_period_values(study, period)}).",
            is_detail=True,
        ))
    return statements


# ── Rule 2: Circadian pattern ────────────────────────────────────────────────

def rule_circadian_pattern(
    study: "StudyMeasurement", classification: StudyClassification
) -> List[Statement]:
    pattern = classification.dipping_sys
    if pattern is None:
        return []

    dipping = f"systolic dipping {_fmt(study.dipping_sys)}%"
    if pattern is DippingPattern.NON_DIPPER:
        code = "CIRC-NONDIP"
        message = (
            f"Non-dipper pattern ({dipping}), associated with "
            "elevated cardiovascular risk."
        )
    elif pattern is DippingPattern.EXTREME:
        code = "CIRC-EXTREME"
        message = f"Extreme dipper pattern ({dipping}), requires additional evaluation."
    else:
        code = "CIRC-NORMAL"
        message = f"Normal circadian pattern ({pattern.value.lower()}, {dipping})."

    return [Statement(
        category=StatementCategory.CIRCADIAN_PATTERN,
        code=code,
        message=message,
    )]


# ── Rule 3: Pulse pressure ───────────────────────────────────────────────────

def rule_pulse_pressure(
    study: "StudyMeasurement", classification: StudyClassification
) -> List[Statement]:
    if classification.pulse_pressure is not Label.ELEVATED:
        return []
    return [Statement(
        category=StatementCategory.PULSE_PRESSURE,
        code="PP-HIGH",
        message=(
            f"Elevated pulse pressure ({_fmt(study.pulse_pressure)} mmHg), "
            "suggests arterial stiffness."
        ),
    )]


# ── Rule 4: Hypertensive load ────────────────────────────────────────────────

def rule_hypertensive_load(
    study: "StudyMeasurement", classification: StudyClassification
) -> List[Statement]:
    if not classification.load_elevated:
        return []
    return [Statement(
        category=StatementCategory.HYPERTENSIVE_LOAD,
        code="LOAD-HIGH",
        message=(
            "Elevated hypertensive load, indicates suboptimal "
            "blood-pressure control."
        ),
    )]


# Emission order of the interpretation.
_RULES = (
    rule_blood_pressure,
    rule_circadian_pattern,
    rule_pulse_pressure,
    rule_hypertensive_load,
)


class DiagnosticInterpreter:
    """
    Stateless; safe to share between requests.
    """

    def interpret(self, study: "StudyMeasurement") -> List[Statement]:
        classification = classify_study(study)
        return self.interpret_classified(study, classification)

    def interpret_classified(
        self, study: "StudyMeasurement", classification: StudyClassification
    ) -> List[Statement]:
        """Same as interpret() when the caller already holds the classification."""
        statements: List[Statement] = []
        for rule in _RULES:
            statements.extend(rule(study, classification))
        return statements

    @staticmethod
    def summarise(statements: Sequence[Statement]) -> Dict[str, Any]:
        """
        Compact summary for API responses.

        Example output:
        {
            "total_statements": 5,
            "categories": ["blood_pressure", "circadian_pattern", ...],
            "hypertension_confirmed": True,
            "statements": [{...}, ...]
        }
        """
        categories: List[str] = []
        for s in statements:
            if s.category.value not in categories:
                categories.append(s.category.value)

        return {
            "total_statements": len(statements),
            "categories": categories,
            "hypertension_confirmed": any(s.code == "BP-HTN-001" for s in statements),
            "statements": [s.to_dict() for s in statements],
        }


_default_interpreter = DiagnosticInterpreter()


def interpret(study: "StudyMeasurement") -> List[Statement]:
    """Ordered diagnostic statements for one complete study."""
    return _default_interpreter.interpret(study)
