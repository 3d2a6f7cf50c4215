"""Blob store backends for uploaded images."""

from travel_journal.storage.backends.azure import AzureBlobBackend
from travel_journal.storage.backends.base import BlobBackend
from travel_journal.storage.backends.local import LocalBlobBackend

__all__ = ["AzureBlobBackend", "BlobBackend", "LocalBlobBackend"]
