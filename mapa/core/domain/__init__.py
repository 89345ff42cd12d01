"""
Domain records: patients, authoring profile, study measurements.
"""
from .patient import Patient, DoctorProfile, Sex
from .study import (
    StudyMeasurement,
    StudyBuilder,
    CompleteStudy,
    IncompleteStudy,
    StudyBuildResult,
    REQUIRED_FIELDS,
)

__all__ = [
    "Patient",
    "DoctorProfile",
    "Sex",
    "StudyMeasurement",
    "StudyBuilder",
    "CompleteStudy",
    "IncompleteStudy",
    "StudyBuildResult",
    "REQUIRED_FIELDS",
]
