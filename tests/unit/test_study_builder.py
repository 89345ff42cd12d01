"""
Unit Tests for StudyBuilder

A StudyMeasurement exists only when the mandatory fields are present and
every numeric value is finite and in range.
"""
from datetime import date

import pytest

from mapa.core.domain.study import REQUIRED_FIELDS, StudyBuilder
from mapa.utils import PreconditionError


@pytest.fixture
def form_values():
    """Raw values as they arrive from a form (strings included)."""
    return {
        "study_date": "2024-05-14",
        "avg_24h_sys": "128",
        "avg_24h_dia": 78,
        "avg_day_sys": 132.5,
        "avg_day_dia": 82,
        "avg_night_sys": 114,
        "avg_night_dia": 66,
        "dipping_sys": "12",
        "quality": "",
        "device": "  Spacelabs 90207 ",
    }


class TestStudyBuilder:

    def test_complete_study(self, form_values):
        result = StudyBuilder("patient-1", study_id="s-1").update(form_values).build()

        assert result.is_complete
        study = result.unwrap()
        assert study.id == "s-1"
        assert study.patient_id == "patient-1"
        assert study.study_date == date(2024, 5, 14)
        assert study.avg_24h_sys == 128.0
        assert study.dipping_sys == 12.0
        assert study.quality is None
        assert study.device == "Spacelabs 90207"

    @pytest.mark.parametrize("missing", REQUIRED_FIELDS)
    def test_each_required_field_is_mandatory(self, form_values, missing):
        del form_values[missing]
        result = StudyBuilder("patient-1").update(form_values).build()

        assert not result.is_complete
        assert result.missing_fields == (missing,)
        assert f"Missing required field: {missing}" in result.reasons

    def test_blank_string_counts_as_missing(self, form_values):
        form_values["avg_night_dia"] = "   "
        result = StudyBuilder("patient-1").update(form_values).build()

        assert result.missing_fields == ("avg_night_dia",)

    @pytest.mark.parametrize("field_name,value", [
        ("avg_24h_sys", "abc"),
        ("avg_24h_sys", float("nan")),
        ("avg_day_dia", float("inf")),
        ("avg_night_sys", -1),
        ("quality", 101),
        ("load_sys", -0.5),
        ("load_dia", 150),
        ("pulse_pressure", True),
        ("study_date", "14/05/2024"),
    ])
    def test_invalid_values(self, form_values, field_name, value):
        form_values[field_name] = value
        result = StudyBuilder("patient-1").update(form_values).build()

        assert not result.is_complete
        assert field_name in dict(result.invalid_fields)

    def test_negative_dipping_is_accepted(self, form_values):
        form_values["dipping_sys"] = -8
        result = StudyBuilder("patient-1").update(form_values).build()

        assert result.is_complete
        assert result.study.dipping_sys == -8.0

    def test_incomplete_unwrap_raises_precondition(self):
        result = StudyBuilder("patient-1").build()

        with pytest.raises(PreconditionError) as exc_info:
            result.unwrap()
        assert set(exc_info.value.missing_fields) == set(REQUIRED_FIELDS)

    def test_set_rejects_unknown_field(self):
        with pytest.raises(KeyError):
            StudyBuilder("patient-1").set("avg_week_sys", 120)

    def test_update_ignores_unknown_keys(self, form_values):
        form_values["patient_id"] = "other"
        result = StudyBuilder("patient-1").update(form_values).build()

        assert result.study.patient_id == "patient-1"

    def test_set_is_chainable(self, form_values):
        builder = StudyBuilder("patient-1").update(form_values)
        result = builder.set("load_sys", 30).set("load_dia", 20).build()

        assert (result.study.load_sys, result.study.load_dia) == (30.0, 20.0)

    def test_to_dict_serialises_dates(self, form_values):
        data = StudyBuilder("patient-1").update(form_values).build().study.to_dict()

        assert data["study_date"] == "2024-05-14"
        assert isinstance(data["created_at"], str)
