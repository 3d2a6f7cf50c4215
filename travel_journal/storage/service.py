"""Upload service: main orchestrator for image ingestion.

Resolves the blob backend, decodes the multipart body, derives a
collision-resistant name and writes the payload.

Examples:
    >>> from travel_journal.storage.service import UploadService
    >>> service = UploadService(config=StorageConfig.from_settings(settings))
    >>> result = await service.ingest(body, request.headers["content-type"])
    >>> result.url
    'https://acct.blob.core.windows.net/images/1711929600000-a3f2b1-kyoto.jpg'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from travel_journal.config import StorageBackendType
from travel_journal.errors import MalformedRequestError
from travel_journal.storage.backends.azure import AzureBlobBackend
from travel_journal.storage.backends.base import BlobBackend
from travel_journal.storage.backends.local import LocalBlobBackend
from travel_journal.storage.config import StorageConfig
from travel_journal.storage.multipart import decode_multipart, select_file_part
from travel_journal.storage.naming import generate_blob_name

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class UploadResult:
    """Where an upload ended up.

    Attributes:
        url: Public URL of the stored object.
        stored_name: Object name inside the container.
    """

    url: str
    stored_name: str


def create_backend(config: StorageConfig) -> BlobBackend:
    """Instantiate the configured blob backend.

    Raises:
        ConfigurationError: If the Azure connection string is unusable.
    """
    if config.backend == StorageBackendType.LOCAL:
        return LocalBlobBackend(root=config.local_root, base_url=config.local_base_url)
    return AzureBlobBackend.from_connection_string(config.connection_string)


class UploadService:
    """Accepts multipart uploads and writes them to the blob store.

    The backend is built per upload, so a missing connection string fails
    that request with ``ConfigurationError`` without affecting the process.
    Storage failures propagate as ``StorageUnavailableError``; retries are
    left to the caller.

    Attributes:
        config: Storage configuration.
        backend_factory: Builds a backend for one upload.
    """

    def __init__(
        self,
        config: StorageConfig,
        backend_factory: Callable[[StorageConfig], BlobBackend] | None = None,
    ) -> None:
        self.config = config
        self.backend_factory = backend_factory or create_backend

    async def ingest(self, body: bytes, content_type_header: str | None) -> UploadResult:
        """Store the file carried by a multipart request body.

        Args:
            body: Raw request body.
            content_type_header: Request Content-Type header.

        Returns:
            UploadResult with public URL and stored name.

        Raises:
            ConfigurationError: Storage is not configured.
            MalformedRequestError: Body is not a usable multipart upload.
            StorageUnavailableError: The blob store failed.
        """
        backend = self.backend_factory(self.config)
        try:
            if len(body) > self.config.max_upload_bytes:
                raise MalformedRequestError(
                    f"Upload exceeds {self.config.max_upload_bytes} bytes"
                )

            part = select_file_part(decode_multipart(body, content_type_header))
            content_type = part.content_type or DEFAULT_CONTENT_TYPE
            stored_name = generate_blob_name(part.filename, content_type)

            await backend.ensure_container(self.config.container)
            url = await backend.put(self.config.container, stored_name, part.data, content_type)
        finally:
            await backend.close()

        logger.info(f"Image uploaded: {stored_name} ({len(part.data)} bytes)")
        return UploadResult(url=url, stored_name=stored_name)
