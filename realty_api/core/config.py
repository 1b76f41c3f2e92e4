"""Application configuration using Pydantic Settings.

This module provides type-safe environment variable management
with validation and computed properties for the database URI and
media locations.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        APP_ENV: Application environment (development, staging, production).
        DEBUG: Enable debug mode.
        API_PREFIX: Prefix for all resource routes.
        PORT: Port used when the service is started directly.
        POSTGRES_USER: PostgreSQL username.
        POSTGRES_PASSWORD: PostgreSQL password.
        POSTGRES_DB: PostgreSQL database name.
        POSTGRES_HOST: PostgreSQL host address.
        POSTGRES_PORT: PostgreSQL port number.
        DATABASE_URL: Full async database URL, overrides the POSTGRES_* values.
        DB_CREATE_ALL: Create missing tables on startup.
        CORS_ORIGINS: Comma-separated list of allowed CORS origins.
        ROOT_PATH: Public base URL used to build absolute media URLs.
        UPLOADS_DIR: Directory holding uploaded images and fact sheets.
        MAX_UPLOAD_SIZE_MB: Largest accepted upload, per file.
        WEBP_QUALITY: Quality used when re-encoding images to WebP.
        DEFAULT_LIST_LIMIT: Records returned by list/search without ``limit``.
        MAX_LIST_LIMIT: Upper bound accepted for ``limit``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    PORT: int = 3500

    # Database
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "realty"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = None
    DB_CREATE_ALL: bool = False

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Media
    ROOT_PATH: str = "http://localhost:3500"
    UPLOADS_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 20
    WEBP_QUALITY: int = 80

    # Listing
    DEFAULT_LIST_LIMIT: int = 20
    MAX_LIST_LIMIT: int = 100

    @computed_field  # type: ignore[misc]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the async database URI.

        Returns:
            Async database connection string for SQLAlchemy.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def uploads_path(self) -> Path:
        """Resolve the uploads directory.

        Returns:
            Absolute path of the uploads directory.
        """
        return Path(self.UPLOADS_DIR).resolve()

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance.
    """
    return Settings()


settings = get_settings()
