"""
Intake field validation for patients and the doctor profile.

Each validator returns a list of human-readable error strings; an empty list
means the input is acceptable. The intake service turns a non-empty list
into a ValidationError so nothing is stored partially.
"""
from __future__ import annotations

from typing import Any, List, Mapping

from mapa.core.domain.patient import Sex
from .identity import validate_identity

MAX_NAME_LENGTH = 200
MAX_AGE = 130


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value).strip()


def validate_patient_fields(data: Mapping[str, Any]) -> List[str]:
    """Validate a patient intake payload (excluding uniqueness)."""
    errors = []

    full_name = _text(data, "full_name")
    if not full_name:
        errors.append("Full name is required")
    elif len(full_name) > MAX_NAME_LENGTH:
        errors.append(f"Full name must be {MAX_NAME_LENGTH} characters or fewer")

    age = data.get("age")
    if age is None or age == "":
        errors.append("Age is required")
    else:
        try:
            if isinstance(age, bool) or int(age) != float(age):
                raise ValueError
            if int(age) < 1 or int(age) > MAX_AGE:
                errors.append(f"Age must be between 1 and {MAX_AGE}")
        except (ValueError, TypeError, OverflowError):
            errors.append("Age must be a positive integer")

    identity_number = _text(data, "identity_number")
    if not identity_number:
        errors.append("RUT is required")
    elif not validate_identity(identity_number):
        errors.append("RUT is invalid")

    sex = _text(data, "sex").lower()
    if not sex:
        errors.append("Sex is required")
    elif sex not in {s.value for s in Sex}:
        errors.append("Sex must be one of: " + ", ".join(s.value for s in Sex))

    return errors


def validate_profile_fields(data: Mapping[str, Any]) -> List[str]:
    """Name and RUT are mandatory for the signing clinician."""
    errors = []
    if not _text(data, "name"):
        errors.append("Name is required")
    identity_number = _text(data, "identity_number")
    if not identity_number:
        errors.append("RUT is required")
    elif not validate_identity(identity_number):
        errors.append("RUT is invalid")
    return errors
