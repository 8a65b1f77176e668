"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Database - relative path for local runs, override via env
    database_url: str = "sqlite:///./data/job_orders.db"

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True

    # ==========================================================================
    # Job order PDF
    # ==========================================================================
    # PNG/JPEG drawn left of the masthead; skipped when unset or undecodable
    pdf_logo_path: Optional[str] = None
    # TrueType faces; the built-in Helvetica pair is used when both are unset
    pdf_font_regular_path: Optional[str] = None
    pdf_font_bold_path: Optional[str] = None
    pdf_default_max_length: int = 100
    pdf_remarks_max_length: int = 1000

    # Stored strings longer than this are treated as corrupt on load
    store_max_string_length: int = 5000

    @field_validator("pdf_default_max_length", "pdf_remarks_max_length")
    @classmethod
    def validate_max_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("PDF text limits must be at least 1 character")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
