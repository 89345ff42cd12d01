"""
Pytest Configuration and Fixtures

Shared fixtures for the MAPA classification and reporting tests.
"""
from datetime import date

import pytest

from mapa.core.domain.patient import DoctorProfile, Patient, Sex
from mapa.core.domain.study import StudyMeasurement

VALID_RUT = "12.345.678-5"
VALID_RUT_SHORT = "7654321-6"
VALID_RUT_K = "10.000.030-K"
VALID_RUT_ZERO = "10.000.004-0"


def make_study(**overrides) -> StudyMeasurement:
    """Complete, normotensive study; override any field."""
    values = dict(
        id="study-1",
        patient_id="patient-1",
        study_date=date(2024, 5, 14),
        avg_24h_sys=120,
        avg_24h_dia=75,
        avg_day_sys=125,
        avg_day_dia=80,
        avg_night_sys=105,
        avg_night_dia=60,
        dipping_sys=15,
        dipping_dia=14,
        load_sys=10,
        load_dia=10,
        pulse_pressure=45,
        avg_heart_rate=72,
        quality=95,
        duration="24h 10min",
        device="Spacelabs 90207",
    )
    values.update(overrides)
    return StudyMeasurement(**values)


@pytest.fixture
def patient() -> Patient:
    return Patient(
        id="patient-1",
        identity_number=VALID_RUT,
        full_name="María González",
        age=58,
        sex=Sex.FEMALE,
        diseases="Type 2 diabetes",
        medications="Metformin 850 mg",
    )


@pytest.fixture
def profile() -> DoctorProfile:
    return DoctorProfile(
        name="Juan Pérez",
        identity_number=VALID_RUT_SHORT,
        registry="RM-4471",
    )


@pytest.fixture
def normal_study() -> StudyMeasurement:
    return make_study()


@pytest.fixture
def hypertensive_study() -> StudyMeasurement:
    return make_study(
        avg_24h_sys=135, avg_24h_dia=85,
        avg_day_sys=140, avg_day_dia=90,
        avg_night_sys=125, avg_night_dia=75,
        dipping_sys=5,
        pulse_pressure=60,
        load_sys=45, load_dia=50,
    )


@pytest.fixture
def patient_payload() -> dict:
    return {
        "full_name": "María González",
        "age": 58,
        "identity_number": VALID_RUT,
        "sex": "female",
        "phone": "+56 9 1234 5678",
        "diseases": "Type 2 diabetes",
    }


@pytest.fixture
def study_values() -> dict:
    return {
        "study_date": "2024-05-14",
        "avg_24h_sys": 135,
        "avg_24h_dia": 85,
        "avg_day_sys": 140,
        "avg_day_dia": 90,
        "avg_night_sys": 125,
        "avg_night_dia": 75,
        "dipping_sys": 5,
        "dipping_dia": 4,
        "load_sys": 45,
        "load_dia": 50,
        "pulse_pressure": 60,
        "avg_heart_rate": 70,
        "quality": 92,
    }
