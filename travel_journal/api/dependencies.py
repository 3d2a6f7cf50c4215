"""FastAPI dependencies for caller identity and services.

Identity is forwarded by the presentation layer in ``X-User-ID`` and
``X-User-Name`` headers and is not verified here. Admin rights come from
the ``ADMIN_USERS`` setting, matching either the id or the username.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request

from travel_journal.config import get_settings
from travel_journal.core.social import SocialService
from travel_journal.database import get_session_factory
from travel_journal.errors import AuthenticationRequiredError
from travel_journal.schemas import Caller
from travel_journal.storage.config import StorageConfig
from travel_journal.storage.service import UploadService
from travel_journal.store.base import DocumentStore
from travel_journal.store.sql import SqlDocumentStore

logger = logging.getLogger(__name__)


async def get_caller(request: Request) -> Caller | None:
    """Resolve the calling user from forwarded identity headers.

    Returns:
        Caller, or None for anonymous requests.
    """
    user_id = (request.headers.get("X-User-ID") or "").strip()
    if not user_id:
        return None

    username = (request.headers.get("X-User-Name") or "").strip() or user_id
    admins = get_settings().admin_users
    return Caller(
        id=user_id,
        username=username,
        is_admin=user_id.lower() in admins or username.lower() in admins,
    )


async def require_caller(caller: Caller | None = Depends(get_caller)) -> Caller:
    """Like get_caller, but rejects anonymous requests.

    Raises:
        AuthenticationRequiredError: If no identity was forwarded.
    """
    if caller is None:
        raise AuthenticationRequiredError("Caller identity required")
    return caller


def get_store() -> DocumentStore:
    """Document store bound to the application database."""
    return SqlDocumentStore(get_session_factory())


def get_social_service(store: DocumentStore = Depends(get_store)) -> SocialService:
    """Social interaction service over the request's store."""
    return SocialService(store)


def get_upload_service() -> UploadService:
    """Upload service built from current settings."""
    return UploadService(config=StorageConfig.from_settings(get_settings()))
