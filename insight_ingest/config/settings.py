"""
Settings Configuration
======================

Environment variable management using pydantic-settings.
Follows the 12-factor app methodology.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Runtime Configuration
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Deployment environment"
    )
    log_format: Literal["auto", "json", "console"] = Field(
        default="auto",
        description="Log rendering; auto means JSON in production, console elsewhere",
    )

    # -------------------------------------------------------------------------
    # HTTP Surface
    # -------------------------------------------------------------------------
    api_host: str = Field(default="0.0.0.0", description="Server host")
    api_port: int = Field(default=8002, ge=1, le=65535, description="Server port")

    # -------------------------------------------------------------------------
    # Upload Limits
    # -------------------------------------------------------------------------
    max_file_size_mb: int = Field(default=50, ge=1, le=500, description="Max file size in MB")

    # -------------------------------------------------------------------------
    # Image Extraction Service
    # -------------------------------------------------------------------------
    image_extractor_url: str = Field(
        default="http://localhost:8001/extract/image",
        description="Endpoint extracting structured data from screenshots",
    )
    image_extractor_api_key: str | None = Field(
        default=None, description="Bearer token for the image extraction endpoint"
    )
    image_extractor_timeout: float = Field(
        default=60.0, gt=0, description="Image extraction timeout in seconds"
    )
    image_extractor_max_retries: int = Field(
        default=3, ge=1, le=10, description="Connection attempts for image extraction"
    )

    @property
    def max_file_size_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.
    """
    return Settings()
