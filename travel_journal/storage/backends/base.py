"""Abstract base class for blob store backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobBackend(ABC):
    """Abstract blob store.

    Implementations must raise ``StorageUnavailableError`` for backend
    failures and never retry internally.
    """

    @abstractmethod
    async def ensure_container(self, container: str) -> None:
        """Create the container if it does not exist yet.

        Args:
            container: Container name.
        """

    @abstractmethod
    async def put(self, container: str, name: str, data: bytes, content_type: str) -> str:
        """Write an object and return its public URL.

        Args:
            container: Container name.
            name: Object name within the container.
            data: Payload bytes.
            content_type: Mime type stored as blob metadata.

        Returns:
            Publicly resolvable URL of the object.
        """

    async def close(self) -> None:
        """Release network resources. No-op by default."""
