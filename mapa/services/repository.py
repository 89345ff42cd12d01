"""
In-memory repositories.

Replace with a database-backed implementation in production; callers only
depend on get / put / find_by_identity / list / count.
"""
from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar

from mapa.core.domain.patient import DoctorProfile, Patient
from mapa.core.domain.study import StudyMeasurement
from mapa.core.reports.assembler import DiagnosticReport
from mapa.core.validation.identity import normalize_identity

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """Thread-safe id → record map preserving insertion order."""

    def __init__(self):
        self._items: Dict[str, T] = {}
        self._lock = threading.Lock()

    def get(self, item_id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(item_id)

    def put(self, item_id: str, item: T) -> T:
        with self._lock:
            self._items[item_id] = item
        return item

    def list(self) -> List[T]:
        with self._lock:
            return list(self._items.values())

    def count(self) -> int:
        with self._lock:
            return len(self._items)


class PatientRepository(InMemoryRepository[Patient]):

    def add(self, patient: Patient) -> Patient:
        return self.put(patient.id, patient)

    def find_by_identity(self, identity_number: str) -> Optional[Patient]:
        """Match on the normalised RUT, so "12.345.678-5" finds "12345678-5"."""
        wanted = normalize_identity(identity_number)
        if not wanted:
            return None
        for patient in self.list():
            if normalize_identity(patient.identity_number) == wanted:
                return patient
        return None


class StudyRepository(InMemoryRepository[StudyMeasurement]):

    def add(self, study: StudyMeasurement) -> StudyMeasurement:
        return self.put(study.id, study)

    def list_for_patient(self, patient_id: str) -> List[StudyMeasurement]:
        return [s for s in self.list() if s.patient_id == patient_id]


class ReportRepository(InMemoryRepository[DiagnosticReport]):

    def add(self, report: DiagnosticReport) -> DiagnosticReport:
        return self.put(report.report_id, report)


class ProfileStore:
    """Single-slot store for the signing clinician's profile."""

    def __init__(self, default: Optional[DoctorProfile] = None):
        self._default = default or DoctorProfile()
        self._profile = self._default
        self._lock = threading.Lock()

    def get(self) -> DoctorProfile:
        with self._lock:
            return self._profile

    def put(self, profile: DoctorProfile) -> DoctorProfile:
        with self._lock:
            self._profile = profile
        return profile

    def reset(self) -> DoctorProfile:
        with self._lock:
            self._profile = self._default
        return self._default


class DraftStore:
    """Single-slot store for the unfinished study-entry form."""

    def __init__(self):
        self._draft: Optional[Dict[str, Any]] = None
        self._saved_at: Optional[datetime] = None
        self._lock = threading.Lock()

    def get(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            return dict(self._draft) if self._draft is not None else None

    @property
    def saved_at(self) -> Optional[datetime]:
        return self._saved_at

    def put(self, values: Dict[str, Any]) -> None:
        with self._lock:
            self._draft = dict(values)
            self._saved_at = datetime.now(timezone.utc)

    def clear(self) -> None:
        with self._lock:
            self._draft = None
            self._saved_at = None
