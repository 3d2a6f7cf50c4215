"""Upload storage configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from travel_journal.config import Settings, StorageBackendType


class StorageConfig(BaseModel):
    """Configuration for the blob ingestion service.

    Attributes:
        backend: Which blob backend to use.
        container: Destination container for uploads.
        connection_string: Azure connection string, resolved lazily per upload.
        local_root: Root directory for the local backend.
        local_base_url: Public URL prefix for the local backend.
        max_upload_bytes: Largest accepted request body.
    """

    backend: StorageBackendType = Field(default=StorageBackendType.AZURE, description="Blob backend")
    container: str = Field(default="images", description="Upload container")
    connection_string: str | None = Field(default=None, repr=False, description="Azure connection string")
    local_root: str = Field(default="./uploads", description="Local backend root directory")
    local_base_url: str = Field(default="http://localhost:8000/uploads", description="Local backend URL prefix")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Upload size limit")

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        """Build the storage config from application settings."""
        return cls(
            backend=settings.STORAGE_BACKEND,
            container=settings.BLOB_CONTAINER,
            connection_string=settings.BLOB_CONNECTION_STRING,
            local_root=settings.LOCAL_BLOB_ROOT,
            local_base_url=settings.LOCAL_BLOB_BASE_URL,
            max_upload_bytes=settings.MAX_UPLOAD_BYTES,
        )
