"""
MAPA Reporting Service - FastAPI Application

API endpoints for:
- Doctor profile
- Patient intake (RUT validation, duplicate prevention)
- Study entry, drafts and history
- Analysis (AI narrative with deterministic fallback)
- Diagnostic reports and dashboard statistics
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mapa import __version__
from mapa.config import Settings, settings as default_settings
from mapa.core.clinical import MEDICAL_CRITERIA
from mapa.core.domain.patient import DoctorProfile
from mapa.core.llm import NarrativeClient, NarrativeConfig
from mapa.core.validation import format_identity, validate_identity
from mapa.models import (
    AnalysisResponse,
    DraftResponse,
    HealthResponse,
    IdentityCheckResponse,
    PatientCreate,
    PatientResponse,
    ProfileResponse,
    ProfileUpdate,
    ReportRequest,
    StatsResponse,
    StudyCreate,
    StudyHistoryItem,
    StudyHistoryResponse,
    StudyValues,
)
from mapa.services import (
    AnalysisService,
    DraftStore,
    IntakeService,
    PatientRepository,
    ProfileStore,
    ReportRepository,
    StatisticsService,
    StudyRepository,
)
from mapa.utils import (
    ExternalServiceError,
    MapaError,
    NotFoundError,
    PreconditionError,
    ValidationError,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)

router = APIRouter()


def _status_for(error: MapaError) -> int:
    if error.code == "DUPLICATE_IDENTITY":
        return 409
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, PreconditionError):
        return 422
    if isinstance(error, ExternalServiceError):
        return 502
    return 500


async def mapa_error_handler(request: Request, exc: MapaError) -> JSONResponse:
    return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())


# ---- Health ----

@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint."""
    state = request.app.state
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - state.started_at).total_seconds(),
        narrative_available=state.analysis.narrative_available,
    )


@router.get("/api/v1/criteria", tags=["Reference"])
async def get_criteria():
    """Medical criteria table used by the classifier."""
    return MEDICAL_CRITERIA.to_dict()


@router.get("/api/v1/stats", response_model=StatsResponse, tags=["Reference"])
async def get_statistics(request: Request):
    return StatsResponse(**request.app.state.statistics.snapshot())


# ---- Doctor profile ----

@router.get("/api/v1/profile", response_model=ProfileResponse, tags=["Profile"])
async def get_profile(request: Request):
    return ProfileResponse(**request.app.state.profiles.get().to_dict())


@router.put("/api/v1/profile", response_model=ProfileResponse, tags=["Profile"])
async def save_profile(payload: ProfileUpdate, request: Request):
    profile = request.app.state.intake.save_profile(payload.model_dump())
    return ProfileResponse(**profile.to_dict())


@router.delete("/api/v1/profile", response_model=ProfileResponse, tags=["Profile"])
async def reset_profile(request: Request):
    """Restore the default (unsigned) profile."""
    return ProfileResponse(**request.app.state.profiles.reset().to_dict())


# ---- Patients ----

@router.get("/api/v1/identity/validate", response_model=IdentityCheckResponse, tags=["Patients"])
async def check_identity(value: str = Query(..., description="RUT to check")):
    """Real-time RUT check for the intake form."""
    return IdentityCheckResponse(
        value=value,
        valid=validate_identity(value),
        formatted=format_identity(value),
    )


@router.post("/api/v1/patients", response_model=PatientResponse, status_code=201, tags=["Patients"])
async def register_patient(payload: PatientCreate, request: Request):
    patient = request.app.state.intake.register_patient(payload.model_dump())
    return PatientResponse(**patient.to_dict())


@router.get("/api/v1/patients", tags=["Patients"])
async def list_patients(request: Request):
    patients = request.app.state.patients.list()
    return {
        "total": len(patients),
        "patients": [p.to_dict() for p in patients],
    }


@router.get("/api/v1/patients/{patient_id}", response_model=PatientResponse, tags=["Patients"])
async def get_patient(patient_id: str, request: Request):
    return PatientResponse(**request.app.state.intake.get_patient(patient_id).to_dict())


# ---- Studies ----

@router.post("/api/v1/studies", status_code=201, tags=["Studies"])
async def submit_study(payload: StudyCreate, request: Request):
    """Validate and store a study; all seven mandatory fields are required."""
    values = payload.model_dump(exclude={"patient_id"})
    study = request.app.state.intake.submit_study(payload.patient_id, values)
    return study.to_dict()


@router.get("/api/v1/studies", response_model=StudyHistoryResponse, tags=["Studies"])
async def study_history(request: Request):
    """Stored studies, newest first."""
    state = request.app.state
    studies = sorted(state.studies.list(), key=lambda s: s.created_at, reverse=True)

    items = []
    for study in studies:
        patient = state.patients.get(study.patient_id)
        items.append(StudyHistoryItem(
            study_id=study.id,
            patient_id=study.patient_id,
            patient_name=patient.full_name if patient else None,
            created_at=study.created_at.isoformat(),
            study_date=study.study_date.isoformat(),
            avg_24h=f"{study.avg_24h_sys:g}/{study.avg_24h_dia:g}",
            dipping_sys=study.dipping_sys,
            quality=study.quality,
        ))
    return StudyHistoryResponse(total=len(items), studies=items)


@router.get("/api/v1/studies/{study_id}", tags=["Studies"])
async def get_study(study_id: str, request: Request):
    return request.app.state.intake.get_study(study_id).to_dict()


@router.post("/api/v1/studies/{study_id}/analysis", response_model=AnalysisResponse, tags=["Analysis"])
async def analyze_study(study_id: str, request: Request):
    """
    AI narrative for the study, or the deterministic interpretation when
    the narrative service is unconfigured or fails.
    """
    outcome = await request.app.state.analysis.analyze(study_id)
    return AnalysisResponse(**outcome.to_dict())


@router.post("/api/v1/studies/{study_id}/report", status_code=201, tags=["Reports"])
async def generate_report(study_id: str, request: Request, payload: Optional[ReportRequest] = None):
    payload = payload or ReportRequest()
    report = await request.app.state.analysis.generate_report(
        study_id, include_narrative=payload.include_narrative
    )
    return report.to_dict()


@router.get("/api/v1/reports/{report_id}", tags=["Reports"])
async def get_report(report_id: str, request: Request):
    return request.app.state.analysis.get_report(report_id).to_dict()


# ---- Drafts ----

@router.get("/api/v1/drafts/current", response_model=DraftResponse, tags=["Studies"])
async def load_draft(request: Request):
    drafts = request.app.state.drafts
    saved_at = drafts.saved_at
    return DraftResponse(values=drafts.get(), saved_at=saved_at.isoformat() if saved_at else None)


@router.put("/api/v1/drafts/current", response_model=DraftResponse, tags=["Studies"])
async def save_draft(payload: StudyValues, request: Request):
    """Store the unfinished form; no completeness check."""
    drafts = request.app.state.drafts
    drafts.put(payload.model_dump(mode="json", exclude_none=True))
    return DraftResponse(values=drafts.get(), saved_at=drafts.saved_at.isoformat())


@router.delete("/api/v1/drafts/current", status_code=204, tags=["Studies"])
async def clear_draft(request: Request):
    request.app.state.drafts.clear()


# ---- Application factory ----

def create_app(
    app_settings: Optional[Settings] = None,
    narrative_client: Optional[NarrativeClient] = None,
) -> FastAPI:
    """
    Build the application with fresh repositories.

    Args:
        app_settings: Settings override (defaults to the environment)
        narrative_client: Pre-built narrative client (tests inject mocks)
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(app_settings.log_level, app_settings.log_file)
        logger.info(
            f"MAPA API ready (AI narrative "
            f"{'enabled' if app.state.analysis.narrative_available else 'disabled'})"
        )
        yield
        logger.info("MAPA API shut down.")

    app = FastAPI(
        title="MAPA Reporting API",
        description="Ambulatory blood-pressure monitoring reports",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    patients = PatientRepository()
    studies = StudyRepository()
    reports = ReportRepository()
    profiles = ProfileStore(DoctorProfile(
        specialty=app_settings.default_specialty,
        institution=app_settings.institution_name,
    ))
    intake = IntakeService(patients, studies, profiles)
    if narrative_client is None:
        narrative_client = NarrativeClient(NarrativeConfig.from_settings(app_settings))

    app.state.started_at = datetime.now()
    app.state.patients = patients
    app.state.studies = studies
    app.state.reports = reports
    app.state.profiles = profiles
    app.state.drafts = DraftStore()
    app.state.intake = intake
    app.state.analysis = AnalysisService(
        intake,
        reports,
        profiles,
        narrative_client=narrative_client,
        narrative_timeout_seconds=app_settings.narrative_timeout_seconds,
    )
    app.state.statistics = StatisticsService(patients, reports)

    app.add_exception_handler(MapaError, mapa_error_handler)
    app.include_router(router)
    return app


app = create_app()


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
