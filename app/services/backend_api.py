"""Async HTTP client for the evaluation backend (extract / enhance / evaluate / storage)."""
import logging
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.models.application import ProcessingAction

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}


class BackendError(Exception):
    """Backend request failed: transport error (status_code None) or non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApplicationNotFoundError(BackendError):
    """Backend answered 404 for a single application."""

    def __init__(self, application_id: str):
        super().__init__("Application not found", status_code=404)
        self.application_id = application_id


class BackendApiClient:
    """Thin async wrapper over the backend REST surface. Payloads pass through unchanged."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        list_timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.list_timeout = list_timeout
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._client.aclose()

    async def health_check(self) -> tuple[bool, Optional[str]]:
        """Backend reachable (any HTTP answer below 500 counts)."""
        try:
            r = await self._client.get("/applications", headers=_JSON_HEADERS)
            if r.status_code >= 500:
                return False, f"HTTP {r.status_code}"
            return True, None
        except httpx.HTTPError as e:
            return False, str(e)

    async def _send(self, method: str, url: str, failure: str, **kwargs: Any) -> httpx.Response:
        try:
            r = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Backend {method} {url} failed: {e}")
            raise BackendError(failure) from e
        if r.is_error:
            logger.error(f"Backend API returned {r.status_code} for {method} {url}: {r.reason_phrase}")
            raise BackendError(failure, status_code=r.status_code)
        return r

    async def list_applications(
        self,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """GET /applications. status 'all' (or empty) is not forwarded."""
        params: dict[str, str] = {}
        if status and status != "all":
            params["status"] = status
        if search:
            params["search"] = search
        r = await self._send(
            "GET", "/applications", "Failed to fetch applications",
            params=params, headers=_JSON_HEADERS, timeout=self.list_timeout,
        )
        content_type = r.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error("Backend returned non-JSON response for /applications")
            raise BackendError("Failed to fetch applications", status_code=502)
        data = r.json()
        if not isinstance(data, list):
            raise BackendError("Failed to fetch applications", status_code=502)
        return data

    async def get_application(self, application_id: str) -> dict[str, Any]:
        """GET /applications/{id}. 404 raises ApplicationNotFoundError."""
        try:
            r = await self._send(
                "GET", f"/applications/{application_id}", "Failed to fetch application",
                headers=_JSON_HEADERS,
            )
        except BackendError as e:
            if e.status_code == 404:
                raise ApplicationNotFoundError(application_id) from e
            raise
        return r.json()

    async def update_application(self, application_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """PATCH /applications/{id} with a partial document, e.g. {"raw": {...}}."""
        r = await self._send(
            "PATCH", f"/applications/{application_id}", "Failed to update application",
            json=changes, headers=_JSON_HEADERS,
        )
        return r.json()

    async def upload_pitch_deck(
        self,
        application_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/pdf",
    ) -> dict[str, Any]:
        """PATCH /applications/{id} as multipart with a replacement PDF."""
        r = await self._send(
            "PATCH", f"/applications/{application_id}", "Failed to upload pitch deck",
            files={"file": (filename, content, content_type)},
        )
        return _json_or_empty(r)

    async def trigger_action(self, application_id: str, action: ProcessingAction) -> dict[str, Any]:
        """POST /applications/{id}?action=extract|enhance|evaluate. Waits for completion."""
        action = ProcessingAction(action)
        r = await self._send(
            "POST", f"/applications/{application_id}", f"Failed to trigger {action.value}",
            params={"action": action.value}, headers=_JSON_HEADERS,
        )
        return _json_or_empty(r)

    async def create_application(
        self,
        fields: dict[str, str],
        filename: str,
        content: bytes,
        content_type: str = "application/pdf",
    ) -> dict[str, Any]:
        """POST /applications as multipart: form fields plus the pitch deck file."""
        r = await self._send(
            "POST", "/applications", "Failed to create application",
            data=fields, files={"file": (filename, content, content_type)},
        )
        return _json_or_empty(r)


def _json_or_empty(r: httpx.Response) -> dict[str, Any]:
    if not r.content:
        return {}
    try:
        data = r.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {"result": data}


# Singleton instance
_backend_api: Optional[BackendApiClient] = None


def get_backend_api() -> BackendApiClient:
    """Get or create the backend API client singleton."""
    global _backend_api
    if _backend_api is None:
        settings = get_settings()
        _backend_api = BackendApiClient(
            base_url=settings.backend_api_url,
            timeout=settings.backend_timeout_seconds,
            list_timeout=settings.list_timeout_seconds,
        )
    return _backend_api


async def close_backend_api() -> None:
    """Close the singleton client (application shutdown)."""
    global _backend_api
    if _backend_api is not None:
        await _backend_api.close()
        _backend_api = None
