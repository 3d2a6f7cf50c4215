"""SQLAlchemy-backed document store."""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travel_journal.errors import NotFoundError, StorageUnavailableError
from travel_journal.models import JournalEntryRecord
from travel_journal.schemas import Comment, Entry, EntryCreate
from travel_journal.store.base import DocumentStore, validate_entry_fields

logger = logging.getLogger(__name__)

ENTRY_KIND = "Journal entry"


def record_to_entry(record: JournalEntryRecord) -> Entry:
    """Convert a database row into an Entry."""
    return Entry(
        id=record.id,
        title=record.title,
        location=record.location,
        date=record.date,
        content=record.content,
        image_url=record.image_url,
        author_id=record.author_id,
        author_name=record.author_name,
        is_private=record.is_private,
        likes=list(record.likes or []),
        comments=[Comment.model_validate(c) for c in (record.comments or [])],
        created_at=record.created_at,
    )


def _text_columns(doc: EntryCreate | Entry) -> dict:
    # Short fields are stored trimmed; content keeps its whitespace.
    return {
        "title": doc.title.strip(),
        "location": doc.location.strip(),
        "date": doc.date.strip(),
        "content": doc.content,
        "image_url": doc.image_url or None,
        "author_id": doc.author_id.strip(),
        "author_name": (doc.author_name or "").strip(),
    }


def _mutable_columns(entry: Entry) -> dict:
    # Everything except id and created_at, which never change after create.
    return {
        **_text_columns(entry),
        "is_private": entry.is_private,
        "likes": list(dict.fromkeys(entry.likes)),
        "comments": [c.model_dump(by_alias=True) for c in entry.comments],
    }


class SqlDocumentStore(DocumentStore):
    """Document store on top of an async SQLAlchemy session factory.

    Attributes:
        session_factory: Creates one session per operation.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Run one operation in its own transaction.

        Commits on success, rolls back on error or cancellation.
        Driver errors become StorageUnavailableError.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as e:
            logger.error(f"Document store operation failed: {e}")
            raise StorageUnavailableError("Document store unavailable") from e

    async def create(self, doc: EntryCreate) -> Entry:
        validate_entry_fields(doc)

        record = JournalEntryRecord(
            id=uuid.uuid4().hex,
            **_text_columns(doc),
            is_private=doc.is_private,
            likes=[],
            comments=[],
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        async with self._transaction() as session:
            session.add(record)
            entry = record_to_entry(record)

        logger.info(f"Created journal entry: {entry.id}")
        return entry

    async def get(self, entry_id: str) -> Entry:
        async with self._transaction() as session:
            result = await session.execute(
                select(JournalEntryRecord).where(JournalEntryRecord.id == entry_id)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError(ENTRY_KIND, entry_id)
            return record_to_entry(record)

    async def replace(self, entry_id: str, entry: Entry) -> Entry:
        validate_entry_fields(entry)

        async with self._transaction() as session:
            result = await session.execute(
                update(JournalEntryRecord)
                .where(JournalEntryRecord.id == entry_id)
                .values(**_mutable_columns(entry))
            )
            if result.rowcount == 0:
                raise NotFoundError(ENTRY_KIND, entry_id)

            result = await session.execute(
                select(JournalEntryRecord)
                .where(JournalEntryRecord.id == entry_id)
                .execution_options(populate_existing=True)
            )
            return record_to_entry(result.scalar_one())

    async def delete(self, entry_id: str) -> None:
        async with self._transaction() as session:
            result = await session.execute(
                delete(JournalEntryRecord).where(JournalEntryRecord.id == entry_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(ENTRY_KIND, entry_id)

        logger.info(f"Deleted journal entry: {entry_id}")

    async def list_by_date(self) -> list[Entry]:
        async with self._transaction() as session:
            result = await session.execute(
                select(JournalEntryRecord).order_by(
                    JournalEntryRecord.date.desc(),
                    JournalEntryRecord.seq.asc(),
                )
            )
            return [record_to_entry(r) for r in result.scalars().all()]
