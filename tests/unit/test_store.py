"""Unit tests for the SQL document store.

Tests for travel_journal/store - create/get/replace/delete/list against a
temporary SQLite database.

Run with:
    pytest tests/unit/test_store.py -v -m fast
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from travel_journal.errors import NotFoundError, StorageUnavailableError, ValidationError
from travel_journal.schemas import Comment
from travel_journal.store.base import validate_entry_fields
from travel_journal.store.sql import SqlDocumentStore
from tests.utils.builders import make_entry_create


@pytest.mark.fast
class TestValidateEntryFields:
    """Required field checks."""

    def test_valid(self):
        validate_entry_fields(make_entry_create())

    @pytest.mark.parametrize("field", ["title", "location", "date", "content", "author_id"])
    def test_missing_field(self, field):
        with pytest.raises(ValidationError, match=field):
            validate_entry_fields(make_entry_create(**{field: None}))

    def test_blank_field(self):
        with pytest.raises(ValidationError, match="title"):
            validate_entry_fields(make_entry_create(title="   "))

    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_entry_fields(make_entry_create(title="", content=""))
        assert "title" in exc_info.value.message
        assert "content" in exc_info.value.message

    @pytest.mark.parametrize("value", [
        "April 1st",
        "20240401",
        "2024-W14-1",
        "2024-092",
        "2024-4-1",
        "2024-02-30",
        "2024-04-01T10:00:00",
    ])
    def test_malformed_date(self, value):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            validate_entry_fields(make_entry_create(date=value))

    def test_surrounding_whitespace_allowed(self):
        validate_entry_fields(make_entry_create(date=" 2024-04-01 "))


@pytest.mark.fast
class TestCreate:
    """Tests for SqlDocumentStore.create()."""

    @pytest.mark.asyncio
    async def test_assigns_server_fields(self, store):
        entry = await store.create(make_entry_create())
        assert entry.id
        assert entry.created_at
        assert entry.likes == []
        assert entry.comments == []
        assert entry.title == "Kyoto"
        assert entry.author_id == "u1"
        assert entry.author_name == "Alice"
        assert entry.is_private is False

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, store):
        first = await store.create(make_entry_create())
        second = await store.create(make_entry_create())
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_rejects_missing_fields(self, store):
        with pytest.raises(ValidationError):
            await store.create(make_entry_create(location=None))
        assert await store.list_by_date() == []

    @pytest.mark.asyncio
    async def test_persists(self, store):
        created = await store.create(make_entry_create(image_url="https://x/img.jpg"))
        fetched = await store.get(created.id)
        assert fetched == created


@pytest.mark.fast
class TestGet:
    """Tests for SqlDocumentStore.get()."""

    @pytest.mark.asyncio
    async def test_missing_raises(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.get("does-not-exist")
        assert exc_info.value.status_code == 404


@pytest.mark.fast
class TestReplace:
    """Tests for SqlDocumentStore.replace()."""

    @pytest.mark.asyncio
    async def test_overwrites_fields(self, store):
        entry = await store.create(make_entry_create())
        comment = Comment(id="c1", author_id="u3", author_name="Traveler", text="Lovely!", date="2024-04-02")
        updated = entry.model_copy(update={
            "title": "Kyoto again",
            "is_private": True,
            "likes": ["u2"],
            "comments": [comment],
        })

        saved = await store.replace(entry.id, updated)

        assert saved.title == "Kyoto again"
        assert saved.is_private is True
        assert saved.likes == ["u2"]
        assert saved.comments == [comment]
        assert await store.get(entry.id) == saved

    @pytest.mark.asyncio
    async def test_id_and_created_at_are_immutable(self, store):
        entry = await store.create(make_entry_create())
        tampered = entry.model_copy(update={"id": "other", "created_at": "1999-01-01T00:00:00"})

        saved = await store.replace(entry.id, tampered)

        assert saved.id == entry.id
        assert saved.created_at == entry.created_at

    @pytest.mark.asyncio
    async def test_dedupes_likes(self, store):
        entry = await store.create(make_entry_create())
        saved = await store.replace(entry.id, entry.model_copy(update={"likes": ["u2", "u2", "u3"]}))
        assert saved.likes == ["u2", "u3"]

    @pytest.mark.asyncio
    async def test_missing_raises(self, store):
        entry = await store.create(make_entry_create())
        with pytest.raises(NotFoundError):
            await store.replace("does-not-exist", entry)

    @pytest.mark.asyncio
    async def test_trims_like_create(self, store):
        entry = await store.create(make_entry_create())
        padded = entry.model_copy(update={"title": "  Kyoto  ", "date": " 2024-04-02 ", "location": "Japan\n"})

        saved = await store.replace(entry.id, padded)

        assert saved.title == "Kyoto"
        assert saved.date == "2024-04-02"
        assert saved.location == "Japan"

    @pytest.mark.asyncio
    async def test_rejects_blank_required_field(self, store):
        entry = await store.create(make_entry_create())
        with pytest.raises(ValidationError):
            await store.replace(entry.id, entry.model_copy(update={"title": ""}))
        assert (await store.get(entry.id)).title == "Kyoto"


@pytest.mark.fast
class TestDelete:
    """Tests for SqlDocumentStore.delete()."""

    @pytest.mark.asyncio
    async def test_delete_then_get(self, store):
        entry = await store.create(make_entry_create())
        await store.delete(entry.id)
        with pytest.raises(NotFoundError):
            await store.get(entry.id)

    @pytest.mark.asyncio
    async def test_delete_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.delete("does-not-exist")

    @pytest.mark.asyncio
    async def test_second_delete_raises(self, store):
        entry = await store.create(make_entry_create())
        await store.delete(entry.id)
        with pytest.raises(NotFoundError):
            await store.delete(entry.id)


@pytest.mark.fast
class TestListByDate:
    """Tests for SqlDocumentStore.list_by_date()."""

    @pytest.mark.asyncio
    async def test_empty(self, store):
        assert await store.list_by_date() == []

    @pytest.mark.asyncio
    async def test_newest_date_first(self, store):
        await store.create(make_entry_create(title="old", date="2023-01-15"))
        await store.create(make_entry_create(title="new", date="2024-06-01"))
        await store.create(make_entry_create(title="mid", date="2024-02-10"))

        titles = [e.title for e in await store.list_by_date()]
        assert titles == ["new", "mid", "old"]

    @pytest.mark.asyncio
    async def test_ties_keep_insertion_order(self, store):
        await store.create(make_entry_create(title="first"))
        await store.create(make_entry_create(title="second"))
        await store.create(make_entry_create(title="third"))

        titles = [e.title for e in await store.list_by_date()]
        assert titles == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_order_holds_after_padded_edit(self, store):
        await store.create(make_entry_create(title="Dec", date="2023-12-31"))
        jan = await store.create(make_entry_create(title="Jan", date="2024-01-01"))
        await store.replace(jan.id, jan.model_copy(update={"date": " 2024-01-01"}))

        titles = [e.title for e in await store.list_by_date()]
        assert titles == ["Jan", "Dec"]


@pytest.mark.fast
class TestBackendFailure:
    """Driver errors surface as StorageUnavailableError."""

    @pytest.mark.asyncio
    async def test_operational_error_is_wrapped(self):
        factory = MagicMock(side_effect=OperationalError("SELECT 1", {}, Exception("disk I/O error")))
        store = SqlDocumentStore(factory)
        with pytest.raises(StorageUnavailableError):
            await store.get("any")
