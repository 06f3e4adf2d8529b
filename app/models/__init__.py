"""Pydantic models for the Pitch Deck Review API."""

# Common Models
from app.models.common import (
    HealthResponse,
    ErrorResponse,
    LogLinesResponse,
)

# Applications
from app.models.application import (
    ApplicationStatus,
    ProcessingAction,
    StatusMetrics,
    ApplicationListResponse,
    PitchDeckFile,
    ApplicationCreate,
    ApplicationFormError,
    compute_status_metrics,
    validate_application_form,
    MAX_PITCH_DECK_BYTES,
    PDF_CONTENT_TYPE,
)

__all__ = [
    # Common
    "HealthResponse",
    "ErrorResponse",
    "LogLinesResponse",
    # Applications
    "ApplicationStatus",
    "ProcessingAction",
    "StatusMetrics",
    "ApplicationListResponse",
    "PitchDeckFile",
    "ApplicationCreate",
    "ApplicationFormError",
    "compute_status_metrics",
    "validate_application_form",
    "MAX_PITCH_DECK_BYTES",
    "PDF_CONTENT_TYPE",
]
