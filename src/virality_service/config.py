"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "virality-service"

    # CORS
    cors_origins: list[str] = ["*"]

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_temperature: float = 0.4  # Lower temperature for more consistent formatting
    analysis_timeout_seconds: float | None = None  # None waits for the provider indefinitely

    # Intake limits
    max_queue_size: int = 10
    max_file_size_bytes: int = 15 * 1024 * 1024

    # Caption length preference applied to new analyses (None = model decides)
    default_caption_length: int | None = None

    # Preview files (temporary directory when unset)
    preview_dir: Path | None = None

    # Reports
    report_title: str = "Virality Report"

    class Config:
        env_prefix = "VIRALITY_"
        case_sensitive = False


settings = Settings()
