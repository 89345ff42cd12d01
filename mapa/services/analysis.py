"""
Analysis Service

Runs the MAPA pipeline for a stored study:

    classify → interpret → (optional AI narrative) → assemble

The AI narrative is a two-branch outcome decided here, never inside the
engine: success yields narrative text; unconfigured, failure or timeout
yields the deterministic interpretation. Both branches return the same
AnalysisOutcome shape.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from mapa.core.clinical import DiagnosticInterpreter, Statement, StudyClassification, classify_study
from mapa.core.domain.patient import Patient
from mapa.core.domain.study import StudyMeasurement
from mapa.core.llm import NarrativeClient, SYSTEM_INSTRUCTION, build_analysis_prompt
from mapa.core.reports import DiagnosticReport, NarrativeSource, ReportAssembler
from mapa.services.intake import IntakeService
from mapa.services.repository import ProfileStore, ReportRepository
from mapa.utils import ExternalServiceError, NotFoundError, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of analysing one study, whichever branch produced it."""
    study_id: str
    source: NarrativeSource
    classification: StudyClassification
    statements: List[Statement]
    narrative: Optional[str] = None
    fallback_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "study_id": self.study_id,
            "source": self.source.value,
            "narrative": self.narrative,
            "fallback_reason": self.fallback_reason,
            "classification": self.classification.to_dict(),
            "statements": [s.to_dict() for s in self.statements],
        }


class AnalysisService:
    """
    Orchestrates interpretation, narrative and report assembly.
    """

    def __init__(
        self,
        intake: IntakeService,
        reports: ReportRepository,
        profiles: ProfileStore,
        narrative_client: Optional[NarrativeClient] = None,
        narrative_timeout_seconds: float = 30.0,
    ):
        self.intake = intake
        self.reports = reports
        self.profiles = profiles
        self.narrative_client = narrative_client
        self.narrative_timeout_seconds = narrative_timeout_seconds
        self.interpreter = DiagnosticInterpreter()
        self.assembler = ReportAssembler()

    @property
    def narrative_available(self) -> bool:
        return self.narrative_client is not None and self.narrative_client.is_available

    def _load(self, study_id: str) -> tuple:
        study = self.intake.get_study(study_id)
        patient = self.intake.get_patient(study.patient_id)
        return patient, study

    async def _request_narrative(self, patient: Patient, study: StudyMeasurement) -> str:
        if self.narrative_client is None:
            raise ExternalServiceError("Narrative service is not configured")

        prompt = build_analysis_prompt(patient, study)
        try:
            response = await asyncio.wait_for(
                self.narrative_client.generate_async(prompt, SYSTEM_INSTRUCTION),
                timeout=self.narrative_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise ExternalServiceError(
                f"Narrative service timed out after {self.narrative_timeout_seconds:g}s",
                details={"reason": "timeout"},
            ) from e
        return response.text

    async def analyze(self, study_id: str) -> AnalysisOutcome:
        """
        AI narrative when available, deterministic interpretation otherwise.

        Raises:
            NotFoundError: unknown study or patient
        """
        patient, study = self._load(study_id)
        classification = classify_study(study)
        statements = self.interpreter.interpret_classified(study, classification)

        try:
            narrative = await self._request_narrative(patient, study)
        except ExternalServiceError as e:
            logger.warning(
                f"AI narrative unavailable, using deterministic interpretation: {e.message}",
                extra={"study_id": study.id},
            )
            return AnalysisOutcome(
                study_id=study.id,
                source=NarrativeSource.DETERMINISTIC,
                classification=classification,
                statements=statements,
                fallback_reason=e.message,
            )

        logger.info("AI narrative generated", extra={"study_id": study.id})
        return AnalysisOutcome(
            study_id=study.id,
            source=NarrativeSource.AI,
            classification=classification,
            statements=statements,
            narrative=narrative,
        )

    async def generate_report(self, study_id: str, include_narrative: bool = False) -> DiagnosticReport:
        """
        Assemble and store a report for a study.

        With include_narrative, the AI narrative is attached when the
        service answers; otherwise the report carries only the
        deterministic statements.
        """
        patient, study = self._load(study_id)
        narrative = None
        if include_narrative:
            outcome = await self.analyze(study_id)
            narrative = outcome.narrative

        report = self.assembler.assemble(
            patient,
            study,
            self.interpreter.interpret(study),
            self.profiles.get(),
            narrative=narrative,
        )
        self.reports.add(report)
        logger.info(f"Report generated: {report.report_id}", extra={"study_id": study.id})
        return report

    def get_report(self, report_id: str) -> DiagnosticReport:
        report = self.reports.get(report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found", "report", report_id)
        return report
