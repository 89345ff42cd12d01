"""
Intake Service

Patient registration, doctor profile and study entry. Every operation is
all-or-nothing: validation runs first and nothing reaches a repository
unless all checks pass.
"""
from __future__ import annotations

import uuid
from typing import Any, Mapping

from mapa.core.domain.patient import DoctorProfile, Patient, Sex
from mapa.core.domain.study import StudyBuilder, StudyMeasurement
from mapa.core.validation import validate_patient_fields, validate_profile_fields
from mapa.services.repository import PatientRepository, ProfileStore, StudyRepository
from mapa.utils import NotFoundError, ValidationError, get_logger, mask_identity

logger = get_logger(__name__)


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


class IntakeService:
    """validate → check uniqueness → store."""

    def __init__(
        self,
        patients: PatientRepository,
        studies: StudyRepository,
        profiles: ProfileStore,
    ):
        self.patients = patients
        self.studies = studies
        self.profiles = profiles

    # ── Patients ──────────────────────────────────────────────────────────

    def register_patient(self, data: Mapping[str, Any]) -> Patient:
        """
        Register a new patient.

        Raises:
            ValidationError: missing/invalid field, invalid RUT, or a patient
                             with the same RUT already exists
                             (code "DUPLICATE_IDENTITY")
        """
        errors = validate_patient_fields(data)
        if errors:
            logger.warning(f"Patient intake rejected: {'; '.join(errors)}")
            raise ValidationError(
                errors[0] if len(errors) == 1 else "Complete all required patient fields",
                field="identity_number" if errors == ["RUT is invalid"] else "patient",
                reasons=errors,
            )

        identity_number = _text(data, "identity_number")
        if self.patients.find_by_identity(identity_number) is not None:
            logger.warning(f"Duplicate patient intake for RUT {mask_identity(identity_number)}")
            raise ValidationError(
                "A patient with this RUT already exists",
                field="identity_number",
                code="DUPLICATE_IDENTITY",
            )

        patient = Patient(
            id=uuid.uuid4().hex,
            identity_number=identity_number,
            full_name=_text(data, "full_name"),
            age=int(data["age"]),
            sex=Sex(_text(data, "sex").lower()),
            phone=_text(data, "phone"),
            email=_text(data, "email"),
            diseases=_text(data, "diseases"),
            medications=_text(data, "medications"),
        )
        self.patients.add(patient)
        logger.info(f"Patient registered: {patient.id} (RUT {mask_identity(identity_number)})")
        return patient

    def get_patient(self, patient_id: str) -> Patient:
        patient = self.patients.get(patient_id)
        if patient is None:
            raise NotFoundError(f"Patient {patient_id} not found", "patient", patient_id)
        return patient

    # ── Doctor profile ────────────────────────────────────────────────────

    def save_profile(self, data: Mapping[str, Any]) -> DoctorProfile:
        errors = validate_profile_fields(data)
        if errors:
            raise ValidationError(
                "Name and RUT are required fields",
                field="profile",
                reasons=errors,
            )

        current = self.profiles.get()
        profile = DoctorProfile(
            name=_text(data, "name"),
            specialty=_text(data, "specialty") or current.specialty,
            institution=_text(data, "institution") or current.institution,
            identity_number=_text(data, "identity_number"),
            registry=_text(data, "registry"),
        ).touched()
        self.profiles.put(profile)
        logger.info("Doctor profile saved")
        return profile

    # ── Studies ───────────────────────────────────────────────────────────

    def submit_study(self, patient_id: str, values: Mapping[str, Any]) -> StudyMeasurement:
        """
        Build and store a study for an existing patient.

        Raises:
            NotFoundError: unknown patient
            ValidationError: mandatory averages/date missing or values out
                             of range
        """
        if not patient_id:
            raise ValidationError("A patient must be selected", field="patient_id")
        self.get_patient(patient_id)

        result = StudyBuilder(patient_id).update(values).build()
        if not result.is_complete:
            logger.warning(f"Study intake rejected for patient {patient_id}: {result.reasons}")
            raise ValidationError(
                "Complete all required study fields",
                field="study",
                reasons=result.reasons,
                details={"missing_fields": list(result.missing_fields)},
            )

        study = self.studies.add(result.study)
        logger.info("Study stored", extra={"study_id": study.id})
        return study

    def get_study(self, study_id: str) -> StudyMeasurement:
        study = self.studies.get(study_id)
        if study is None:
            raise NotFoundError(f"Study {study_id} not found", "study", study_id)
        return study
