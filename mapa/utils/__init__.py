"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging, mask_identity
from .exceptions import (
    MapaError,
    ValidationError,
    PreconditionError,
    ExternalServiceError,
    NotFoundError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "mask_identity",
    "MapaError",
    "ValidationError",
    "PreconditionError",
    "ExternalServiceError",
    "NotFoundError",
]
