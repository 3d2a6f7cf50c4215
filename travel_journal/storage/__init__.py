"""Blob storage package for Travel Journal.

Accepts multipart image uploads and writes them to Azure Blob Storage
(or a local directory during development).

Examples:
    >>> from travel_journal.storage import StorageConfig, UploadService
    >>> service = UploadService(config=StorageConfig.from_settings(settings))
    >>> result = await service.ingest(body, content_type_header)
"""

from travel_journal.storage.config import StorageConfig
from travel_journal.storage.connection import ConnectionInfo, parse_connection_string, resolve_client
from travel_journal.storage.multipart import MultipartPart, decode_multipart, select_file_part
from travel_journal.storage.naming import generate_blob_name, sanitize_filename
from travel_journal.storage.service import UploadResult, UploadService, create_backend

__all__ = [
    "ConnectionInfo",
    "MultipartPart",
    "StorageConfig",
    "UploadResult",
    "UploadService",
    "create_backend",
    "decode_multipart",
    "generate_blob_name",
    "parse_connection_string",
    "resolve_client",
    "sanitize_filename",
    "select_file_part",
]
