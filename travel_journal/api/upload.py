"""Image upload endpoint.

Endpoints:
    POST /api/upload - multipart/form-data body in, {url, filename} out

The raw body is handed to the upload service so part selection and
validation live in one place instead of FastAPI's form handling.

Tests:
    - tests/integration/test_api_upload.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from travel_journal.api.dependencies import get_upload_service
from travel_journal.schemas import UploadResponse
from travel_journal.storage.service import UploadService

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Store an uploaded image and return its public URL.

    Raises:
        MalformedRequestError: Body is not a usable multipart upload (400).
        ConfigurationError: Storage is not configured (500).
        StorageUnavailableError: Blob store failure (503).
    """
    body = await request.body()
    result = await service.ingest(body, request.headers.get("content-type"))
    return UploadResponse(url=result.url, filename=result.stored_name)
