"""SQLAlchemy models for Travel Journal.

Each journal entry is stored as one flat row; ``likes`` and ``comments``
live in JSON columns so the whole document is read and replaced at once.

Examples:
    >>> from travel_journal.models import JournalEntryRecord
    >>> record = JournalEntryRecord(id="abc", title="Kyoto", ...)

Tests:
    - tests/unit/test_store.py
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class JournalEntryRecord(Base):
    """Persisted journal entry document.

    Attributes:
        seq: Insertion sequence, breaks ties when ordering by date
        id: Opaque entry identifier, unique and immutable
        title: Entry title
        location: Free-form place name
        date: Client-supplied calendar date (YYYY-MM-DD)
        content: Body text
        image_url: Optional reference into the blob store
        author_id: Owning user id
        author_name: Author display name captured at creation
        is_private: Hidden from other users when true
        likes: User ids that liked the entry
        comments: Comment documents in display order
        created_at: ISO-8601 creation timestamp (UTC)
    """

    __tablename__ = "journal_entries"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, default=None)

    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    likes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[str] = mapped_column(String(40), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<JournalEntryRecord(id='{self.id}', date='{self.date}')>"
