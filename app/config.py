"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Pitch Deck Review API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Evaluation backend (extraction, enrichment, scoring, file storage)
    backend_api_url: str = "http://localhost:8080"
    backend_timeout_seconds: float = 60.0
    list_timeout_seconds: float = 30.0  # list endpoint can be slow on a cold backend

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB

    # Log buffer exposed at /api/logs
    log_buffer_max_lines: int = 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
