"""Application (pitch deck) models and create-form validation."""
import re
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

MAX_PITCH_DECK_BYTES = 10 * 1024 * 1024
PDF_CONTENT_TYPE = "application/pdf"

_STARTUP_NAME_RE = re.compile(r"[A-Za-z0-9\s\-&.]+")
_CONTACT_NAME_RE = re.compile(r"[A-Za-z\s\-']+")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_WEBSITE_URL_RE = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@$&'()*+,;=%]+")


class ApplicationStatus(str, Enum):
    """Processing status reported by the backend."""
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class ProcessingAction(str, Enum):
    """Backend processing steps a reviewer can trigger."""
    EXTRACT = "extract"
    ENHANCE = "enhance"
    EVALUATE = "evaluate"


class StatusMetrics(BaseModel):
    """Counts by status over the listed applications."""
    total: int = Field(..., ge=0)
    submitted: int = Field(..., ge=0)
    completed: int = Field(..., ge=0)


class ApplicationListResponse(BaseModel):
    """Backend list passed through unchanged, plus computed status metrics."""
    applications: list[dict[str, Any]]
    status: StatusMetrics


def compute_status_metrics(applications: list[dict[str, Any]]) -> StatusMetrics:
    """Count applications overall and per status."""
    return StatusMetrics(
        total=len(applications),
        submitted=sum(1 for a in applications if a.get("status") == ApplicationStatus.SUBMITTED.value),
        completed=sum(1 for a in applications if a.get("status") == ApplicationStatus.COMPLETED.value),
    )


class PitchDeckFile(BaseModel):
    """Metadata of an uploaded pitch deck (content travels separately)."""
    filename: str
    content_type: Optional[str] = None
    size: int = Field(..., ge=0)


class ApplicationCreate(BaseModel):
    """Create-application form. Each field reports a single, field-specific message."""
    startup_name: Optional[str] = Field(default=None, validate_default=True)
    contact_name: Optional[str] = Field(default=None, validate_default=True)
    contact_email: Optional[str] = Field(default=None, validate_default=True)
    website_url: Optional[str] = Field(default=None, validate_default=True)
    file: Optional[PitchDeckFile] = Field(default=None, validate_default=True)

    @field_validator("startup_name")
    @classmethod
    def check_startup_name(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Startup name is required")
        if len(v) > 100:
            raise ValueError("Startup name must be less than 100 characters")
        if not _STARTUP_NAME_RE.fullmatch(v):
            raise ValueError("Startup name contains invalid characters")
        return v.strip()

    @field_validator("contact_name")
    @classmethod
    def check_contact_name(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Contact name is required")
        if len(v) > 50:
            raise ValueError("Contact name must be less than 50 characters")
        if not _CONTACT_NAME_RE.fullmatch(v):
            raise ValueError("Contact name contains invalid characters")
        return v.strip()

    @field_validator("contact_email")
    @classmethod
    def check_contact_email(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Contact email is required")
        if len(v) > 100:
            raise ValueError("Email must be less than 100 characters")
        if not _EMAIL_RE.fullmatch(v):
            raise ValueError("Please enter a valid email address")
        return v.strip()

    @field_validator("website_url")
    @classmethod
    def check_website_url(cls, v: Optional[str]) -> str:
        if not v or not v.strip():
            raise ValueError("Website URL is required")
        if len(v) > 200:
            raise ValueError("Website URL must be less than 200 characters")
        if not _WEBSITE_URL_RE.fullmatch(v):
            raise ValueError("Please enter a valid website URL")
        return v.strip()

    @field_validator("file")
    @classmethod
    def check_file(cls, v: Optional[PitchDeckFile]) -> PitchDeckFile:
        if v is None:
            raise ValueError("Pitch deck file is required")
        if v.content_type != PDF_CONTENT_TYPE:
            raise ValueError("Only PDF files are allowed")
        if v.size > MAX_PITCH_DECK_BYTES:
            raise ValueError("File size must be less than 10MB")
        return v

    def form_fields(self) -> dict[str, str]:
        """Text fields as sent in the multipart body."""
        return self.model_dump(exclude={"file"})


class ApplicationFormError(ValueError):
    """Create form failed local validation; errors maps field name -> message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def validate_application_form(
    startup_name: Optional[str],
    contact_name: Optional[str],
    contact_email: Optional[str],
    website_url: Optional[str],
    file: Optional[PitchDeckFile],
) -> ApplicationCreate:
    """Validate the create form. Raises ApplicationFormError with one message per bad field."""
    try:
        return ApplicationCreate(
            startup_name=startup_name,
            contact_name=contact_name,
            contact_email=contact_email,
            website_url=website_url,
            file=file,
        )
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__root__"
            ctx_error = (err.get("ctx") or {}).get("error")
            errors.setdefault(field, str(ctx_error) if ctx_error else err["msg"])
        raise ApplicationFormError(errors) from e
