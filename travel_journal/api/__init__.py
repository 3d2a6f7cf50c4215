"""HTTP API module.

Contains all routes served under /api.
"""

from fastapi import APIRouter

from travel_journal.api.journals import router as journals_router
from travel_journal.api.upload import router as upload_router

router = APIRouter(prefix="/api")
router.include_router(journals_router)
router.include_router(upload_router)

__all__ = ["router"]
