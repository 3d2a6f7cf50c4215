"""Abstract base class for journal document stores."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date as calendar_date

from travel_journal.errors import ValidationError
from travel_journal.schemas import Entry, EntryCreate

REQUIRED_FIELDS = ("title", "location", "date", "content", "author_id")

# Calendar dates sort correctly as text only in this exact form.
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def validate_entry_fields(doc: EntryCreate | Entry) -> None:
    """Reject documents missing required fields or carrying a malformed date.

    Raises:
        ValidationError: Naming every missing field, or the bad date.
    """
    missing = [
        name for name in REQUIRED_FIELDS
        if not (getattr(doc, name, None) or "").strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    message = f"date must be YYYY-MM-DD, got {doc.date!r}"
    value = doc.date.strip()
    if not DATE_PATTERN.fullmatch(value):
        raise ValidationError(message)
    try:
        calendar_date.fromisoformat(value)
    except ValueError:
        raise ValidationError(message) from None


class DocumentStore(ABC):
    """CRUD over journal entry documents.

    Implementations must raise ``NotFoundError`` for absent ids and
    ``StorageUnavailableError`` for backend failures. Each call is atomic:
    either it completes or the previous document state stays visible.
    """

    @abstractmethod
    async def create(self, doc: EntryCreate) -> Entry:
        """Persist a new entry with server-assigned id and createdAt.

        Args:
            doc: Client-supplied fields.

        Returns:
            The stored entry with empty likes and comments.
        """

    @abstractmethod
    async def get(self, entry_id: str) -> Entry:
        """Read the current state of an entry.

        Args:
            entry_id: Entry id.

        Returns:
            The stored entry.
        """

    @abstractmethod
    async def replace(self, entry_id: str, entry: Entry) -> Entry:
        """Overwrite every mutable field of an existing entry.

        Args:
            entry_id: Target entry id; ``entry.id`` is ignored.
            entry: New document state.

        Returns:
            The stored entry.
        """

    @abstractmethod
    async def delete(self, entry_id: str) -> None:
        """Delete an entry along with its likes and comments.

        Args:
            entry_id: Entry id.
        """

    @abstractmethod
    async def list_by_date(self) -> list[Entry]:
        """List all entries, newest ``date`` first.

        Returns:
            Entries ordered by date descending, ties in insertion order.
        """
