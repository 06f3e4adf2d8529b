"""Services package - backend API client."""
from .backend_api import (
    BackendApiClient,
    BackendError,
    ApplicationNotFoundError,
    get_backend_api,
    close_backend_api,
)

__all__ = [
    "BackendApiClient",
    "BackendError",
    "ApplicationNotFoundError",
    "get_backend_api",
    "close_backend_api",
]
