"""
Patient and authoring-profile records.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class Sex(str, Enum):
    """Biological sex category recorded at intake."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass(frozen=True)
class Patient:
    """
    A registered patient.

    Created once by the intake service after the RUT has been validated and
    checked for uniqueness; never mutated afterwards.
    """
    id: str
    identity_number: str          # RUT as entered, e.g. "12.345.678-5"
    full_name: str
    age: int
    sex: Sex
    phone: str = ""
    email: str = ""
    diseases: str = ""            # free-text disease history
    medications: str = ""         # free-text medication history
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "identity_number": self.identity_number,
            "full_name": self.full_name,
            "age": self.age,
            "sex": self.sex.value,
            "phone": self.phone,
            "email": self.email,
            "diseases": self.diseases,
            "medications": self.medications,
            "registered_at": self.registered_at.isoformat(),
        }


@dataclass(frozen=True)
class DoctorProfile:
    """The clinician signing the report."""
    name: str = ""
    specialty: str = "Cardiología"
    institution: str = "Ergo SaniTas SpA"
    identity_number: str = ""
    registry: str = ""            # medical registry number
    last_update: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.name and self.identity_number)

    def touched(self) -> "DoctorProfile":
        """Copy with last_update stamped to now."""
        return replace(self, last_update=datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "specialty": self.specialty,
            "institution": self.institution,
            "identity_number": self.identity_number,
            "registry": self.registry,
            "last_update": self.last_update.isoformat() if self.last_update else None,
        }
