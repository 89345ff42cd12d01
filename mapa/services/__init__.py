"""
Service layer: repositories, intake, analysis and statistics.
"""
from .repository import (
    PatientRepository,
    StudyRepository,
    ReportRepository,
    ProfileStore,
    DraftStore,
)
from .intake import IntakeService
from .analysis import AnalysisService, AnalysisOutcome
from .statistics import StatisticsService

__all__ = [
    "PatientRepository",
    "StudyRepository",
    "ReportRepository",
    "ProfileStore",
    "DraftStore",
    "IntakeService",
    "AnalysisService",
    "AnalysisOutcome",
    "StatisticsService",
]
