"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.log_buffer import LOG_FORMAT, install_log_buffer_handler
from app.routers import (
    health_router,
    applications_router,
    logs_router,
)
from app.services import close_backend_api

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    install_log_buffer_handler(settings.log_buffer_max_lines)
    logger.info("Starting Pitch Deck Review API...")
    logger.info(f"Backend API: {settings.backend_api_url}")
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    yield
    await close_backend_api()
    logger.info("Shutting down Pitch Deck Review API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## Pitch Deck Review API

        Proxy between the review dashboard and the evaluation backend.

        ### Features:
        - Application list with counts by status
        - Application detail, partial updates and pitch deck replacement
        - Processing actions: **extract**, **enhance**, **evaluate**
        - Create application (multipart, validated before forwarding)
        - Recent log lines for the dashboard
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(applications_router)
    app.include_router(logs_router)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "error": str(exc)}
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
