"""
Pydantic API models.
"""
from .schemas import (
    PatientCreate,
    PatientResponse,
    IdentityCheckResponse,
    ProfileUpdate,
    ProfileResponse,
    StudyValues,
    StudyCreate,
    StudyHistoryItem,
    StudyHistoryResponse,
    AnalysisResponse,
    ReportRequest,
    DraftResponse,
    HealthResponse,
    StatsResponse,
)

__all__ = [
    "PatientCreate",
    "PatientResponse",
    "IdentityCheckResponse",
    "ProfileUpdate",
    "ProfileResponse",
    "StudyValues",
    "StudyCreate",
    "StudyHistoryItem",
    "StudyHistoryResponse",
    "AnalysisResponse",
    "ReportRequest",
    "DraftResponse",
    "HealthResponse",
    "StatsResponse",
]
