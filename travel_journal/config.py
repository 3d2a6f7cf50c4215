"""Application configuration with Pydantic Settings.

Settings are loaded from environment variables and .env files. Storage
credentials are optional at startup: a missing connection string only
surfaces as ``ConfigurationError`` when an upload is attempted.

Examples:
    >>> from travel_journal.config import get_settings
    >>> settings = get_settings()
    >>> settings.BLOB_CONTAINER
    'images'

Tests:
    - tests/unit/test_config.py
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class StorageBackendType(str, Enum):
    """Where uploaded images are written."""

    AZURE = "azure"
    LOCAL = "local"


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        DATABASE_URL: Document store connection string (SQLite or PostgreSQL)
        BLOB_CONNECTION_STRING: Azure storage account connection string
        BLOB_CONTAINER: Container receiving uploaded images
        STORAGE_BACKEND: Blob backend (azure or local)
        LOCAL_BLOB_ROOT: Directory used by the local backend
        LOCAL_BLOB_BASE_URL: Public URL prefix for the local backend
        MAX_UPLOAD_BYTES: Largest accepted upload payload
        ADMIN_USERS: Comma-separated user ids or usernames with admin rights
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Document store
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./journal.db",
        description="Database connection string",
    )

    # Blob store
    BLOB_CONNECTION_STRING: str | None = Field(
        default=None,
        description="Azure storage connection string",
    )
    BLOB_CONTAINER: str = Field(
        default="images",
        description="Container for uploaded images",
    )
    STORAGE_BACKEND: StorageBackendType = Field(
        default=StorageBackendType.AZURE,
        description="Blob storage backend",
    )
    LOCAL_BLOB_ROOT: str = Field(
        default="./uploads",
        description="Root directory for the local blob backend",
    )
    LOCAL_BLOB_BASE_URL: str = Field(
        default="http://localhost:8000/uploads",
        description="Public URL prefix for locally stored blobs",
    )
    MAX_UPLOAD_BYTES: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum upload payload size in bytes",
        ge=1,
    )

    # Identity
    ADMIN_USERS: str = Field(
        default="admin",
        description="Comma-separated user ids or usernames granted admin rights",
    )

    # Application Settings
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (API docs, error details in responses)",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format."""
        valid_prefixes = ("sqlite", "postgresql", "postgres")
        if not any(v.startswith(prefix) for prefix in valid_prefixes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {valid_prefixes}"
            )
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def expose_error_details(self) -> bool:
        """Whether error responses may carry exception text. Never in production."""
        return self.DEBUG and not self.is_production

    @property
    def admin_users(self) -> frozenset[str]:
        """Normalized set of admin user ids and usernames."""
        return frozenset(
            name.strip().lower() for name in self.ADMIN_USERS.split(",") if name.strip()
        )

    @property
    def storage_configured(self) -> bool:
        """Whether uploads can work without further configuration."""
        if self.STORAGE_BACKEND == StorageBackendType.LOCAL:
            return True
        return bool(self.BLOB_CONNECTION_STRING and self.BLOB_CONNECTION_STRING.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.
    """
    return Settings()
