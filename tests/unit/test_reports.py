"""
Unit Tests for Report Assembly
"""
from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timezone

import pytest

from mapa.core.clinical import interpret
from mapa.core.reports import DiagnosticReport, NarrativeSource, ReportAssembler, assemble
from mapa.utils import PreconditionError


class TestReportAssembler:

    def test_assemble(self, patient, hypertensive_study, profile):
        statements = interpret(hypertensive_study)
        report = assemble(patient, hypertensive_study, statements, profile)

        assert isinstance(report, DiagnosticReport)
        assert report.report_id.startswith("MAPA-")
        assert report.patient == patient
        assert report.study == hypertensive_study
        assert report.authoring_profile == profile
        assert list(report.statements) == statements
        assert report.classification.is_hypertensive
        assert report.narrative is None
        assert report.narrative_source is NarrativeSource.DETERMINISTIC

    def test_narrative_sets_ai_source(self, patient, normal_study, profile):
        report = ReportAssembler().assemble(
            patient, normal_study, interpret(normal_study), profile,
            narrative="Narrative text",
        )
        assert report.narrative_source is NarrativeSource.AI

    def test_overrides(self, patient, normal_study, profile):
        stamp = datetime(2024, 5, 15, 9, 30, tzinfo=timezone.utc)
        report = assemble(
            patient, normal_study, interpret(normal_study), profile,
            generated_at=stamp, report_id="MAPA-TEST",
        )

        assert report.generated_at == stamp
        assert report.report_id == "MAPA-TEST"

    def test_mismatched_patient_raises(self, patient, normal_study, profile):
        foreign = replace(normal_study, patient_id="someone-else")

        with pytest.raises(PreconditionError):
            assemble(patient, foreign, interpret(foreign), profile)

    def test_report_is_immutable(self, patient, normal_study, profile):
        report = assemble(patient, normal_study, interpret(normal_study), profile)

        with pytest.raises(FrozenInstanceError):
            report.narrative = "edited"

    def test_to_dict(self, patient, hypertensive_study, profile):
        data = assemble(patient, hypertensive_study, interpret(hypertensive_study), profile).to_dict()

        assert data["patient"]["identity_number"] == patient.identity_number
        assert data["study"]["avg_24h_sys"] == 135
        assert data["authoring_profile"]["name"] == profile.name
        assert data["statements"][0]["code"] == "BP-HTN-001"
        assert data["narrative_source"] == "deterministic"
