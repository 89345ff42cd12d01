"""
API request/response schemas.

Request models keep clinical fields optional so that missing values reach
the intake layer and come back as a ValidationError with every reason,
rather than as a bare schema error.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ---- Patients ----

class PatientCreate(BaseModel):
    """Patient intake form."""
    full_name: Optional[str] = None
    age: Optional[int] = Field(default=None, description="Age in years")
    identity_number: Optional[str] = Field(default=None, description="RUT, e.g. 12.345.678-5")
    sex: Optional[str] = Field(default=None, description="male / female / other")
    phone: Optional[str] = None
    email: Optional[str] = None
    diseases: Optional[str] = None
    medications: Optional[str] = None


class PatientResponse(BaseModel):
    id: str
    identity_number: str
    full_name: str
    age: int
    sex: str
    phone: str = ""
    email: str = ""
    diseases: str = ""
    medications: str = ""
    registered_at: str


class IdentityCheckResponse(BaseModel):
    value: str
    valid: bool
    formatted: Optional[str] = None


# ---- Doctor profile ----

class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    specialty: Optional[str] = None
    institution: Optional[str] = None
    identity_number: Optional[str] = None
    registry: Optional[str] = Field(default=None, description="Medical registry number")


class ProfileResponse(BaseModel):
    name: str
    specialty: str
    institution: str
    identity_number: str
    registry: str
    last_update: Optional[str] = None


# ---- Studies ----

class StudyValues(BaseModel):
    """Study-entry form values (mmHg, %, bpm)."""
    study_date: Optional[date] = None
    duration: Optional[str] = None
    quality: Optional[float] = Field(default=None, description="Recording quality, %")
    device: Optional[str] = None
    avg_24h_sys: Optional[float] = None
    avg_24h_dia: Optional[float] = None
    avg_day_sys: Optional[float] = None
    avg_day_dia: Optional[float] = None
    avg_night_sys: Optional[float] = None
    avg_night_dia: Optional[float] = None
    load_sys: Optional[float] = None
    load_dia: Optional[float] = None
    dipping_sys: Optional[float] = None
    dipping_dia: Optional[float] = None
    pulse_pressure: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    clinical_findings: Optional[str] = None
    additional_notes: Optional[str] = None


class StudyCreate(StudyValues):
    patient_id: Optional[str] = None


class StudyHistoryItem(BaseModel):
    """One line of the study history list."""
    study_id: str
    patient_id: str
    patient_name: Optional[str] = None
    created_at: str
    study_date: str
    avg_24h: str
    dipping_sys: Optional[float] = None
    quality: Optional[float] = None


class StudyHistoryResponse(BaseModel):
    total: int
    studies: List[StudyHistoryItem]


# ---- Analysis & reports ----

class AnalysisResponse(BaseModel):
    study_id: str
    source: str
    narrative: Optional[str] = None
    fallback_reason: Optional[str] = None
    classification: Dict[str, Any]
    statements: List[Dict[str, Any]]


class ReportRequest(BaseModel):
    include_narrative: bool = Field(
        default=False,
        description="Attach the AI narrative when the service is available",
    )


class DraftResponse(BaseModel):
    values: Optional[Dict[str, Any]] = None
    saved_at: Optional[str] = None


# ---- Service ----

class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    narrative_available: bool


class StatsResponse(BaseModel):
    patients_count: int
    reports_count: int
    last_access: Optional[str] = None
    last_access_label: Optional[str] = None
