"""
Custom Exception Hierarchy

Error categories raised at the intake boundary and by the collaborators
around the classification engine. The engine itself (checksum, thresholds,
interpretation) never raises for clinical input.
"""
from typing import Optional, Dict, Any, List


class MapaError(Exception):
    """Base exception for all MAPA reporting errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(MapaError):
    """Rejected intake: missing field, malformed RUT, duplicate patient."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        reasons: Optional[List[str]] = None,
        code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.field = field
        self.reasons = list(reasons) if reasons else [message]
        super().__init__(
            message=message,
            code=code,
            details={"field": field, "reasons": self.reasons, **(details or {})}
        )


class PreconditionError(MapaError):
    """A study reached classification or assembly without its mandatory data."""

    def __init__(
        self,
        message: str,
        missing_fields: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.missing_fields = list(missing_fields or [])
        super().__init__(
            message=message,
            code="PRECONDITION_ERROR",
            details={"missing_fields": self.missing_fields, **(details or {})}
        )


class ExternalServiceError(MapaError):
    """AI narrative call failed, timed out, or is not configured."""

    def __init__(
        self,
        message: str,
        service: str = "narrative",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="EXTERNAL_SERVICE_ERROR",
            details={"service": service, **(details or {})}
        )
        self.service = service


class NotFoundError(MapaError):
    """Lookup of a patient, study or report by id found nothing."""

    def __init__(
        self,
        message: str,
        resource: str = "unknown",
        resource_id: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            details={"resource": resource, "id": resource_id}
        )
        self.resource = resource
        self.resource_id = resource_id
