"""Streamlit UI configuration."""
import os
from pathlib import Path


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


def get_api_url() -> str:
    """Proxy API base URL (no trailing slash)."""
    return os.environ.get("STREAMLIT_API_URL", "http://localhost:8000").rstrip("/")


def get_api_timeout() -> float:
    """Request timeout in seconds. Processing actions can take a while; default 60s."""
    return _float_env("STREAMLIT_API_TIMEOUT", 60.0)


def get_list_timeout() -> float:
    """Timeout for the application list fetch; default 30s."""
    return _float_env("STREAMLIT_LIST_TIMEOUT", 30.0)


def get_store_backend() -> str:
    """'file' (local JSON file, default) or 'redis' for filters and the reviewer session."""
    return os.environ.get("STREAMLIT_STORE_BACKEND", "file").strip().lower()


def get_store_path() -> Path:
    default = Path.home() / ".pitchdeck_review" / "store.json"
    return Path(os.environ.get("STREAMLIT_STORE_PATH", str(default))).expanduser()


def get_redis_url() -> str:
    return os.environ.get("STREAMLIT_REDIS_URL", "redis://localhost:6379/0")
