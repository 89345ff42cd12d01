"""
Study measurement record and its builder.

A StudyMeasurement only exists once StudyBuilder has confirmed that the
seven mandatory fields are present and every numeric value is finite and
within its physical range. Anything else comes back as an IncompleteStudy
listing what is missing or invalid.
"""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from mapa.utils.exceptions import PreconditionError

# Mandatory before any classification can run.
REQUIRED_FIELDS: Tuple[str, ...] = (
    "study_date",
    "avg_24h_sys",
    "avg_24h_dia",
    "avg_day_sys",
    "avg_day_dia",
    "avg_night_sys",
    "avg_night_dia",
)

OPTIONAL_NUMERIC_FIELDS: Tuple[str, ...] = (
    "quality",
    "load_sys",
    "load_dia",
    "dipping_sys",
    "dipping_dia",
    "pulse_pressure",
    "avg_heart_rate",
)

TEXT_FIELDS: Tuple[str, ...] = (
    "duration",
    "device",
    "clinical_findings",
    "additional_notes",
)

# (min, max) accepted at intake; None = unbounded on that side.
# Dipping may be negative (reverse dippers), so it is only checked for finiteness.
_RANGES: Dict[str, Tuple[Optional[float], Optional[float]]] = {
    "avg_24h_sys": (0.0, None),
    "avg_24h_dia": (0.0, None),
    "avg_day_sys": (0.0, None),
    "avg_day_dia": (0.0, None),
    "avg_night_sys": (0.0, None),
    "avg_night_dia": (0.0, None),
    "quality": (0.0, 100.0),
    "load_sys": (0.0, 100.0),
    "load_dia": (0.0, 100.0),
    "pulse_pressure": (0.0, None),
    "avg_heart_rate": (0.0, None),
}


@dataclass(frozen=True)
class StudyMeasurement:
    """One ambulatory blood-pressure study (mmHg, %, bpm)."""
    id: str
    patient_id: str
    study_date: date

    # Period averages (mmHg)
    avg_24h_sys: float
    avg_24h_dia: float
    avg_day_sys: float
    avg_day_dia: float
    avg_night_sys: float
    avg_night_dia: float

    # Circadian pattern / load / derived (optional)
    dipping_sys: Optional[float] = None
    dipping_dia: Optional[float] = None
    load_sys: Optional[float] = None
    load_dia: Optional[float] = None
    pulse_pressure: Optional[float] = None
    avg_heart_rate: Optional[float] = None

    # Recording metadata
    quality: Optional[float] = None
    duration: str = ""
    device: str = ""

    clinical_findings: str = ""
    additional_notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["study_date"] = self.study_date.isoformat()
        data["created_at"] = self.created_at.isoformat()
        return data


@dataclass(frozen=True)
class CompleteStudy:
    """Builder outcome: the study satisfies every intake invariant."""
    study: StudyMeasurement
    is_complete: bool = field(default=True, init=False)

    def unwrap(self) -> StudyMeasurement:
        return self.study


@dataclass(frozen=True)
class IncompleteStudy:
    """Builder outcome: mandatory fields missing or values out of range."""
    missing_fields: Tuple[str, ...] = ()
    invalid_fields: Tuple[Tuple[str, str], ...] = ()
    is_complete: bool = field(default=False, init=False)

    @property
    def reasons(self) -> List[str]:
        reasons = [f"Missing required field: {name}" for name in self.missing_fields]
        reasons.extend(f"{name}: {why}" for name, why in self.invalid_fields)
        return reasons

    def unwrap(self) -> StudyMeasurement:
        raise PreconditionError(
            "Study is incomplete; classification requires all mandatory averages",
            missing_fields=list(self.missing_fields),
            details={"invalid_fields": dict(self.invalid_fields)},
        )


StudyBuildResult = Union[CompleteStudy, IncompleteStudy]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_number(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("expected a number")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("must be a finite number")
    return number


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


class StudyBuilder:
    """
    Collects raw study-entry values and produces a StudyBuildResult.

    Usage:
        result = StudyBuilder(patient_id).update(form_values).build()
        if result.is_complete:
            study = result.study
    """

    def __init__(self, patient_id: str, study_id: Optional[str] = None):
        self.patient_id = patient_id
        self.study_id = study_id or uuid.uuid4().hex
        self._values: Dict[str, Any] = {}

    def set(self, name: str, value: Any) -> "StudyBuilder":
        if name not in REQUIRED_FIELDS + OPTIONAL_NUMERIC_FIELDS + TEXT_FIELDS:
            raise KeyError(f"Unknown study field: {name}")
        self._values[name] = value
        return self

    def update(self, values: Mapping[str, Any]) -> "StudyBuilder":
        """Set every known field present in `values`; unknown keys are ignored."""
        known = set(REQUIRED_FIELDS + OPTIONAL_NUMERIC_FIELDS + TEXT_FIELDS)
        for name, value in values.items():
            if name in known:
                self._values[name] = value
        return self

    def build(self) -> StudyBuildResult:
        missing: List[str] = []
        invalid: List[Tuple[str, str]] = []
        parsed: Dict[str, Any] = {}

        for name in REQUIRED_FIELDS:
            raw = self._values.get(name)
            if _is_blank(raw):
                missing.append(name)
                continue
            try:
                parsed[name] = _parse_date(raw) if name == "study_date" else _parse_number(raw)
            except (TypeError, ValueError) as exc:
                invalid.append((name, str(exc) or "invalid value"))

        for name in OPTIONAL_NUMERIC_FIELDS:
            raw = self._values.get(name)
            if _is_blank(raw):
                parsed[name] = None
                continue
            try:
                parsed[name] = _parse_number(raw)
            except (TypeError, ValueError) as exc:
                invalid.append((name, str(exc) or "invalid value"))

        for name, (low, high) in _RANGES.items():
            value = parsed.get(name)
            if value is None:
                continue
            if low is not None and value < low:
                invalid.append((name, f"must be >= {low:g}"))
            elif high is not None and value > high:
                invalid.append((name, f"must be <= {high:g}"))

        if missing or invalid:
            return IncompleteStudy(missing_fields=tuple(missing), invalid_fields=tuple(invalid))

        for name in TEXT_FIELDS:
            raw = self._values.get(name)
            parsed[name] = "" if raw is None else str(raw).strip()

        return CompleteStudy(
            study=StudyMeasurement(id=self.study_id, patient_id=self.patient_id, **parsed)
        )
