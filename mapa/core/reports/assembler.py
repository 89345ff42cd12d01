"""
Diagnostic Report Assembler

Merges patient identity, study measurements and the diagnostic
interpretation into a single immutable DiagnosticReport. Rendering,
printing and storage happen elsewhere; this module only composes values.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from mapa.core.clinical.base import Statement, StudyClassification
from mapa.core.clinical.classifier import classify_study
from mapa.core.domain.patient import DoctorProfile, Patient
from mapa.core.domain.study import StudyMeasurement
from mapa.utils import PreconditionError, get_logger

logger = get_logger(__name__)


class NarrativeSource(str, Enum):
    """Which branch produced the report's narrative text."""
    AI            = "ai"
    DETERMINISTIC = "deterministic"


@dataclass(frozen=True)
class DiagnosticReport:
    """Read-only report document handed to rendering/export."""
    report_id: str
    generated_at: datetime
    patient: Patient
    study: StudyMeasurement
    authoring_profile: DoctorProfile
    classification: StudyClassification
    statements: Tuple[Statement, ...]
    narrative: Optional[str] = None
    narrative_source: NarrativeSource = NarrativeSource.DETERMINISTIC

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at.isoformat(),
            "patient": self.patient.to_dict(),
            "study": self.study.to_dict(),
            "authoring_profile": self.authoring_profile.to_dict(),
            "classification": self.classification.to_dict(),
            "statements": [s.to_dict() for s in self.statements],
            "narrative": self.narrative,
            "narrative_source": self.narrative_source.value,
        }


class ReportAssembler:
    """
    Builds DiagnosticReports. Holds no state between calls.
    """

    def assemble(
        self,
        patient: Patient,
        study: StudyMeasurement,
        interpretation: Sequence[Statement],
        authoring_profile: DoctorProfile,
        *,
        narrative: Optional[str] = None,
        generated_at: Optional[datetime] = None,
        report_id: Optional[str] = None,
    ) -> DiagnosticReport:
        """
        Compose a report from already-validated inputs.

        Args:
            patient: Registered patient the study belongs to
            study: Complete study measurement
            interpretation: Ordered statements from DiagnosticInterpreter
            authoring_profile: Signing clinician
            narrative: Optional AI narrative text; its presence sets the
                       narrative source to "ai"
            generated_at: Timestamp override (defaults to UTC now)

        Raises:
            PreconditionError: study.patient_id does not match patient.id
        """
        if study.patient_id != patient.id:
            raise PreconditionError(
                f"Study {study.id} does not belong to patient {patient.id}",
                details={"study_id": study.id, "patient_id": patient.id},
            )

        report = DiagnosticReport(
            report_id=report_id or f"MAPA-{uuid.uuid4().hex[:12].upper()}",
            generated_at=generated_at or datetime.now(timezone.utc),
            patient=patient,
            study=study,
            authoring_profile=authoring_profile,
            classification=classify_study(study),
            statements=tuple(interpretation),
            narrative=narrative,
            narrative_source=(
                NarrativeSource.AI if narrative else NarrativeSource.DETERMINISTIC
            ),
        )
        logger.debug(f"Assembled report {report.report_id} ({len(report.statements)} statements)")
        return report


_default_assembler = ReportAssembler()


def assemble(
    patient: Patient,
    study: StudyMeasurement,
    interpretation: Sequence[Statement],
    authoring_profile: DoctorProfile,
    **kwargs: Any,
) -> DiagnosticReport:
    return _default_assembler.assemble(
        patient, study, interpretation, authoring_profile, **kwargs
    )
