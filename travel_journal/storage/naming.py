"""Blob naming and filename sanitization for uploads.

Stored names carry a millisecond timestamp and a short random token in
front of the original filename so concurrent uploads of identically named
files never collide.

Format: {epoch_ms}-{uuid6}-{filename}

Examples:
    >>> from travel_journal.storage.naming import sanitize_filename, generate_blob_name
    >>> sanitize_filename("Photos/Mt Fuji (1).JPG")
    'Mt-Fuji-1.JPG'
    >>> generate_blob_name("fuji.jpg")
    '1711929600000-a3f2b1-fuji.jpg'
"""

from __future__ import annotations

import mimetypes
import re
import uuid
from datetime import datetime, timezone

DEFAULT_STEM = "upload"
DEFAULT_EXTENSION = ".bin"


def sanitize_filename(filename: str, max_length: int = 100) -> str:
    """Reduce a client-supplied filename to a safe blob name component.

    Rules:
        - Drop any directory part (both / and \\ separators)
        - Replace whitespace runs with hyphens
        - Strip everything except [A-Za-z0-9._-]
        - Collapse repeated hyphens and strip leading dots/hyphens
        - Truncate the stem so the result fits max_length

    Args:
        filename: Raw filename from the upload.
        max_length: Maximum length of the result.

    Returns:
        Sanitized filename, or an empty string if nothing usable remains.
    """
    name = filename.replace("\\", "/").split("/")[-1].strip()
    name = re.sub(r"\s+", "-", name)
    name = re.sub(r"[^A-Za-z0-9._-]", "", name)
    name = re.sub(r"-{2,}", "-", name)
    name = name.lstrip(".-")

    if len(name) > max_length:
        stem, dot, ext = name.rpartition(".")
        if dot and stem and len(ext) < 10:
            name = stem[: max_length - len(ext) - 1].rstrip("-.") + "." + ext
        else:
            name = name[:max_length]
    return name


def default_filename(content_type: str | None) -> str:
    """Synthesize a filename when the upload did not declare one."""
    extension = None
    if content_type:
        extension = mimetypes.guess_extension(content_type.split(";")[0].strip())
    return f"{DEFAULT_STEM}{extension or DEFAULT_EXTENSION}"


def generate_blob_name(
    filename: str | None,
    content_type: str | None = None,
    now: datetime | None = None,
    uuid_str: str | None = None,
) -> str:
    """Generate a collision-resistant stored name for an upload.

    Args:
        filename: Original filename, may be None or unusable.
        content_type: Declared mime type, used for synthesized names.
        now: Override timestamp (defaults to now UTC).
        uuid_str: Override random token.

    Returns:
        Stored object name.
    """
    safe = sanitize_filename(filename) if filename else ""
    if not safe:
        safe = default_filename(content_type)

    if now is None:
        now = datetime.now(timezone.utc)
    if uuid_str is None:
        uuid_str = uuid.uuid4().hex[:6]
    else:
        uuid_str = uuid_str[:6]

    return f"{int(now.timestamp() * 1000)}-{uuid_str}-{safe}"
