"""Azure Blob Storage backend using the async SDK."""

from __future__ import annotations

import logging

from azure.core.exceptions import AzureError, ClientAuthenticationError, ResourceExistsError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

from travel_journal.errors import ConfigurationError, StorageUnavailableError
from travel_journal.storage.backends.base import BlobBackend
from travel_journal.storage.connection import resolve_client

logger = logging.getLogger(__name__)


class AzureBlobBackend(BlobBackend):
    """Blob backend writing block blobs to an Azure storage account.

    Attributes:
        client: Async blob service client; closed by ``close()``.
    """

    def __init__(self, client: BlobServiceClient) -> None:
        self.client = client

    @classmethod
    def from_connection_string(cls, raw: str | None) -> "AzureBlobBackend":
        """Build a backend from a raw connection string.

        Raises:
            ConfigurationError: If the connection string is unusable.
        """
        return cls(resolve_client(raw))

    async def ensure_container(self, container: str) -> None:
        """Create the container with public blob read access if absent."""
        try:
            await self.client.create_container(container, public_access="blob")
            logger.info(f"Created blob container: {container}")
        except ResourceExistsError:
            pass
        except ClientAuthenticationError as e:
            raise ConfigurationError("Storage credentials were rejected") from e
        except AzureError as e:
            logger.error(f"Container check failed for {container}: {e}")
            raise StorageUnavailableError(f"Cannot prepare container {container}") from e

    async def put(self, container: str, name: str, data: bytes, content_type: str) -> str:
        """Upload a block blob and return its URL."""
        blob = self.client.get_blob_client(container=container, blob=name)
        try:
            await blob.upload_blob(
                data,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type),
            )
        except ClientAuthenticationError as e:
            raise ConfigurationError("Storage credentials were rejected") from e
        except AzureError as e:
            logger.error(f"Blob upload failed for {name}: {e}")
            raise StorageUnavailableError(f"Cannot upload blob {name}") from e
        return blob.url

    async def close(self) -> None:
        await self.client.close()
