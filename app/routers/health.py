"""Health check endpoint."""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.models import HealthResponse
from app.services import get_backend_api

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check health status of the proxy and the evaluation backend."
)
async def health_check():
    """
    Check the evaluation backend is reachable.

    Returns 200 if healthy, 503 otherwise.
    """
    settings = get_settings()
    dependencies: dict[str, str] = {}

    try:
        backend = get_backend_api()
        ok, error = await backend.health_check()
        dependencies["backend_api"] = "healthy" if ok else f"unhealthy: {error}"
    except Exception as e:
        dependencies["backend_api"] = f"unhealthy: {str(e)}"

    all_healthy = all(v == "healthy" for v in dependencies.values())
    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version,
        dependencies=dependencies
    )

    if not all_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump()
        )

    return response
