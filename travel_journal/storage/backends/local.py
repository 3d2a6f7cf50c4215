"""Local filesystem blob backend using pathlib.

Used for development; the FastAPI app serves ``root`` under ``/uploads``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from travel_journal.errors import StorageUnavailableError
from travel_journal.storage.backends.base import BlobBackend

logger = logging.getLogger(__name__)


class LocalBlobBackend(BlobBackend):
    """Pathlib-based local filesystem blob backend.

    Attributes:
        root: Directory holding one sub-directory per container.
        base_url: Public URL prefix mapped onto ``root``.
    """

    def __init__(self, root: str, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    async def ensure_container(self, container: str) -> None:
        """Create the container directory."""
        try:
            (self.root / container).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot create container {container}") from e

    async def put(self, container: str, name: str, data: bytes, content_type: str) -> str:
        """Write the payload to ``root/container/name``."""
        path = self.root / container / name
        try:
            path.write_bytes(data)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write blob {name}") from e

        logger.debug(f"Stored {len(data)} bytes ({content_type}) at {path}")
        return f"{self.base_url}/{quote(container)}/{quote(name)}"
