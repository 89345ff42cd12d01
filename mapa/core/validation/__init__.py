"""
Validation Module

RUT checksum and intake field validation. Pure functions, no storage.
"""
from .identity import (
    validate_identity,
    normalize_identity,
    compute_check_character,
    format_identity,
)
from .intake import validate_patient_fields, validate_profile_fields

__all__ = [
    "validate_identity",
    "normalize_identity",
    "compute_check_character",
    "format_identity",
    "validate_patient_fields",
    "validate_profile_fields",
]
