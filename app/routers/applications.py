"""Application endpoints: 1:1 proxy of the evaluation backend."""
import logging
from typing import Any, Optional
from fastapi import APIRouter, Body, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.models import (
    ApplicationFormError,
    ApplicationListResponse,
    ErrorResponse,
    PitchDeckFile,
    ProcessingAction,
    compute_status_metrics,
    validate_application_form,
)
from app.services import ApplicationNotFoundError, BackendError, get_backend_api

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


def _to_http_error(e: BackendError) -> HTTPException:
    """Backend status is passed through; transport failures become 502."""
    return HTTPException(
        status_code=e.status_code or status.HTTP_502_BAD_GATEWAY,
        detail=e.message,
    )


@router.get(
    "",
    response_model=ApplicationListResponse,
    summary="List Applications"
)
async def list_applications(
    status_filter: Optional[str] = Query(None, alias="status", description="submitted | completed | incomplete | all"),
    search: Optional[str] = Query(None, description="Free-text search"),
):
    """List applications with counts by status."""
    backend = get_backend_api()
    try:
        applications = await backend.list_applications(status=status_filter, search=search)
    except BackendError as e:
        raise _to_http_error(e)
    return ApplicationListResponse(
        applications=applications,
        status=compute_status_metrics(applications),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Create Application"
)
async def create_application(
    startup_name: str = Form(""),
    contact_name: str = Form(""),
    contact_email: str = Form(""),
    website_url: str = Form(""),
    file: Optional[UploadFile] = File(None),
):
    """Validate the create form, then forward it to the backend as multipart."""
    content = await file.read() if file is not None else b""
    deck = None
    if file is not None:
        deck = PitchDeckFile(filename=file.filename or "pitch_deck.pdf", content_type=file.content_type, size=len(content))
    try:
        form = validate_application_form(startup_name, contact_name, contact_email, website_url, deck)
    except ApplicationFormError as e:
        logger.info(f"Rejected create form: {e.errors}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(detail="Validation failed", errors=e.errors).model_dump(),
        )

    backend = get_backend_api()
    try:
        created = await backend.create_application(
            form.form_fields(), form.file.filename, content, form.file.content_type,
        )
    except BackendError as e:
        raise _to_http_error(e)
    logger.info(f"Created application for {form.startup_name}")
    return created


@router.get(
    "/{application_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Get Application"
)
async def get_application(application_id: str):
    """Get one application (raw, enriched, results, issues)."""
    backend = get_backend_api()
    try:
        return await backend.get_application(application_id)
    except ApplicationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found"
        )
    except BackendError as e:
        raise _to_http_error(e)


@router.patch(
    "/{application_id}",
    summary="Update Application"
)
async def update_application(application_id: str, changes: dict[str, Any] = Body(...)):
    """Apply a partial document, e.g. {"raw": {...}} after a section edit."""
    backend = get_backend_api()
    try:
        updated = await backend.update_application(application_id, changes)
    except BackendError as e:
        raise _to_http_error(e)
    logger.info(f"Updated application {application_id}: {sorted(changes)}")
    return updated


@router.patch(
    "/{application_id}/file",
    summary="Replace Pitch Deck"
)
async def upload_pitch_deck(application_id: str, file: UploadFile = File(...)):
    """Replace the pitch deck PDF for an application."""
    settings = get_settings()
    content = await file.read()
    if file.content_type != "application/pdf":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are allowed"
        )
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File size must be less than 10MB"
        )
    backend = get_backend_api()
    try:
        return await backend.upload_pitch_deck(
            application_id, file.filename or "pitch_deck.pdf", content, file.content_type,
        )
    except BackendError as e:
        raise _to_http_error(e)


@router.post(
    "/{application_id}/actions/{action}",
    summary="Trigger Processing Action"
)
async def trigger_action(application_id: str, action: ProcessingAction):
    """Run extract / enhance / evaluate on the backend and wait for it to finish."""
    backend = get_backend_api()
    logger.info(f"Triggering {action.value} for application {application_id}")
    try:
        result = await backend.trigger_action(application_id, action)
    except BackendError as e:
        raise _to_http_error(e)
    return {"action": action.value, "application_id": application_id, "result": result}
