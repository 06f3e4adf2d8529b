"""HTTP client for the Pitch Deck Review API (the FastAPI proxy)."""
from typing import Any, Optional

import httpx

from app.models.application import (
    PDF_CONTENT_TYPE,
    PitchDeckFile,
    ProcessingAction,
    validate_application_form,
)
from streamlit_ui.utils.config import get_api_timeout, get_api_url, get_list_timeout


class ApiError(Exception):
    """Base for request failures surfaced to the dashboard."""


class NetworkFailure(ApiError):
    """Request could not complete or the API answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(ApiError):
    """The requested application does not exist."""


def get_client(base_url: Optional[str] = None) -> httpx.Client:
    """Return an httpx client with base URL. Timeout from config (default 60s)."""
    url = (base_url or get_api_url()).rstrip("/")
    return httpx.Client(base_url=url, timeout=get_api_timeout())


def _detail(r: httpx.Response, fallback: str) -> str:
    try:
        body = r.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return fallback


def _request(
    client: Optional[httpx.Client],
    method: str,
    url: str,
    failure: str,
    not_found: bool = False,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request; map transport errors and non-2xx answers onto the ApiError taxonomy."""
    c = client or get_client()
    try:
        r = c.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        raise NetworkFailure(f"{failure}: {e}") from e
    finally:
        if not client:
            c.close()
    if not_found and r.status_code == 404:
        raise NotFound(_detail(r, "Application not found"))
    if r.is_error:
        raise NetworkFailure(_detail(r, failure), status_code=r.status_code)
    return r


def get_applications(
    client: Optional[httpx.Client] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> dict[str, Any]:
    """GET /api/applications. Returns { applications: list, status: {total, submitted, completed} }."""
    params: dict[str, str] = {}
    if status and status != "all":
        params["status"] = status
    if search:
        params["search"] = search
    r = _request(
        client, "GET", "/api/applications", "Failed to fetch applications",
        params=params, timeout=get_list_timeout(),
    )
    return r.json()


def get_application(application_id: str, client: Optional[httpx.Client] = None) -> dict[str, Any]:
    """GET /api/applications/{id}. Raises NotFound on 404."""
    r = _request(
        client, "GET", f"/api/applications/{application_id}", "Failed to fetch application",
        not_found=True,
    )
    return r.json()


def update_application(
    application_id: str,
    changes: dict[str, Any],
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """PATCH /api/applications/{id} with a partial document."""
    r = _request(
        client, "PATCH", f"/api/applications/{application_id}", "Failed to save changes",
        json=changes,
    )
    return r.json()


def save_raw_data(
    application_id: str,
    raw: dict[str, Any],
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """Persist the whole raw extracted-data document after a section edit."""
    return update_application(application_id, {"raw": raw}, client=client)


def upload_pitch_deck(
    application_id: str,
    filename: str,
    content: bytes,
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """PATCH /api/applications/{id}/file with a replacement PDF."""
    r = _request(
        client, "PATCH", f"/api/applications/{application_id}/file", "Failed to upload pitch deck",
        files={"file": (filename, content, PDF_CONTENT_TYPE)},
    )
    return r.json()


def trigger_action(
    application_id: str,
    action: ProcessingAction | str,
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """POST /api/applications/{id}/actions/{action}. Blocks until the backend finishes."""
    action = ProcessingAction(action)
    r = _request(
        client, "POST", f"/api/applications/{application_id}/actions/{action.value}",
        f"Failed to trigger {action.value}",
    )
    return r.json()


def create_application(
    startup_name: str,
    contact_name: str,
    contact_email: str,
    website_url: str,
    filename: Optional[str],
    content: Optional[bytes],
    content_type: Optional[str],
    client: Optional[httpx.Client] = None,
) -> dict[str, Any]:
    """Validate locally, then POST /api/applications as multipart.

    Raises ApplicationFormError (no request is sent) when a field is invalid.
    """
    deck = None
    if content is not None:
        deck = PitchDeckFile(filename=filename or "pitch_deck.pdf", content_type=content_type, size=len(content))
    form = validate_application_form(startup_name, contact_name, contact_email, website_url, deck)
    r = _request(
        client, "POST", "/api/applications", "Failed to create application",
        data=form.form_fields(),
        files={"file": (form.file.filename, content, form.file.content_type)},
    )
    return r.json()


def get_backend_logs(client: Optional[httpx.Client] = None) -> dict[str, Any]:
    """GET /api/logs. Returns { lines: list[str], total: int }."""
    r = _request(client, "GET", "/api/logs", "Failed to fetch logs")
    return r.json()
