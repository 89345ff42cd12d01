"""
Unit Tests for the Threshold Classifier

Boundary behaviour of every band in MEDICAL_CRITERIA.
"""
import math

import pytest

from mapa.core.clinical import (
    DippingPattern,
    Label,
    MEDICAL_CRITERIA,
    Period,
    classify_blood_pressure,
    classify_dipping,
    classify_hypertensive_load,
    classify_pulse_pressure,
    classify_study,
)
from tests.conftest import make_study


class TestClassifyBloodPressure:
    """Tests for the per-period OR rule."""

    @pytest.mark.parametrize("period,systolic,diastolic,expected", [
        ("24h", 130, 79, True),     # systolic alone at threshold
        ("24h", 129, 79, False),
        ("24h", 129, 80, True),     # diastolic alone at threshold
        ("day", 135, 0, True),
        ("day", 134, 84, False),
        ("day", 100, 85, True),
        ("night", 120, 69, True),
        ("night", 119, 69, False),
        ("night", 119, 70, True),
    ])
    def test_thresholds(self, period, systolic, diastolic, expected):
        result = classify_blood_pressure(systolic, diastolic, period)

        assert result.is_hypertensive is expected
        assert result.label == (Label.HYPERTENSION if expected else Label.NORMAL)
        assert result.period == Period(period)

    def test_accepts_enum_period(self):
        assert classify_blood_pressure(135, 85, Period.DAY).is_hypertensive

    def test_unknown_period_raises(self):
        with pytest.raises(ValueError):
            classify_blood_pressure(120, 80, "week")

    def test_implausible_values_are_classified_literally(self):
        assert classify_blood_pressure(-10, -5, "24h").is_hypertensive is False
        assert classify_blood_pressure(1e6, 0, "24h").is_hypertensive is True

    def test_threshold_table(self):
        thresholds = MEDICAL_CRITERIA.blood_pressure
        assert (thresholds[Period.H24].systolic, thresholds[Period.H24].diastolic) == (130, 80)
        assert (thresholds[Period.DAY].systolic, thresholds[Period.DAY].diastolic) == (135, 85)
        assert (thresholds[Period.NIGHT].systolic, thresholds[Period.NIGHT].diastolic) == (120, 70)


class TestClassifyDipping:

    @pytest.mark.parametrize("percent,expected", [
        (35, DippingPattern.EXTREME),
        (20, DippingPattern.EXTREME),
        (19.9, DippingPattern.NORMAL),
        (15, DippingPattern.NORMAL),
        (10, DippingPattern.NORMAL),
        (9.9, DippingPattern.REDUCED),
        (5, DippingPattern.REDUCED),
        (1, DippingPattern.REDUCED),
        (0.9, DippingPattern.NON_DIPPER),
        (0, DippingPattern.NON_DIPPER),
        (-5, DippingPattern.NON_DIPPER),
    ])
    def test_bands(self, percent, expected):
        assert classify_dipping(percent) is expected

    def test_nan_is_non_dipper(self):
        assert classify_dipping(math.nan) is DippingPattern.NON_DIPPER


class TestPulsePressureAndLoad:

    @pytest.mark.parametrize("value,expected", [
        (45, Label.NORMAL),
        (55, Label.NORMAL),
        (55.1, Label.ELEVATED),
        (56, Label.ELEVATED),
    ])
    def test_pulse_pressure(self, value, expected):
        assert classify_pulse_pressure(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (0, Label.NORMAL),
        (40, Label.NORMAL),
        (41, Label.ELEVATED),
        (100, Label.ELEVATED),
    ])
    def test_hypertensive_load(self, value, expected):
        assert classify_hypertensive_load(value) is expected


class TestClassifyStudy:

    def test_hypertensive_study(self, hypertensive_study):
        result = classify_study(hypertensive_study)

        assert result.hypertensive_periods == (Period.H24, Period.DAY, Period.NIGHT)
        assert result.is_hypertensive
        assert result.dipping_sys is DippingPattern.REDUCED
        assert result.pulse_pressure is Label.ELEVATED
        assert result.load_elevated

    def test_normal_study(self, normal_study):
        result = classify_study(normal_study)

        assert result.hypertensive_periods == ()
        assert not result.is_hypertensive
        assert result.dipping_sys is DippingPattern.NORMAL
        assert result.pulse_pressure is Label.NORMAL
        assert not result.load_elevated

    def test_only_night_flagged(self):
        result = classify_study(make_study(avg_night_sys=121))
        assert result.hypertensive_periods == (Period.NIGHT,)

    def test_missing_optional_fields_classify_to_none(self):
        result = classify_study(make_study(
            dipping_sys=None, dipping_dia=None,
            pulse_pressure=None, load_sys=None, load_dia=None,
        ))

        assert result.dipping_sys is None
        assert result.pulse_pressure is None
        assert result.load_sys is None
        assert not result.load_elevated

    def test_single_elevated_load_is_enough(self):
        assert classify_study(make_study(load_sys=10, load_dia=41)).load_elevated

    def test_to_dict(self, hypertensive_study):
        data = classify_study(hypertensive_study).to_dict()

        assert data["blood_pressure"]["24h"]["label"] == "Hypertension"
        assert data["dipping_sys"] == "Reduced dipper"
        assert data["pulse_pressure"] == "Elevated"
