"""Pydantic schemas for journal entries, comments and callers.

Python attributes are snake_case; the wire format uses camelCase aliases
(``imageUrl``, ``authorId``, ``isPrivate`` ...) so documents keep the flat
keyed shape clients already consume.

Examples:
    >>> from travel_journal.schemas import Entry
    >>> entry = Entry.model_validate({"id": "1", "title": "Kyoto", ...})
    >>> entry.model_dump(by_alias=True)["authorId"]
    'u1'
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Comment(CamelModel):
    """A comment attached to an entry."""

    id: str
    author_id: str
    author_name: str
    text: str
    date: str


class Entry(CamelModel):
    """A persisted journal entry document."""

    id: str
    title: str
    location: str
    date: str
    content: str
    image_url: str | None = None
    author_id: str
    author_name: str = ""
    is_private: bool = False
    likes: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    created_at: str


class EntryCreate(CamelModel):
    """Fields accepted when creating an entry.

    Everything is optional at the schema level; required fields are
    enforced by the store so the failure is a ``ValidationError``.
    """

    title: str | None = None
    location: str | None = None
    date: str | None = None
    content: str | None = None
    image_url: str | None = None
    author_id: str | None = None
    author_name: str | None = None
    is_private: bool = False


class EntryUpdate(CamelModel):
    """Author-editable fields. Likes and comments are never accepted here.

    An omitted ``isPrivate`` keeps the stored visibility.
    """

    title: str | None = None
    location: str | None = None
    date: str | None = None
    content: str | None = None
    image_url: str | None = None
    is_private: bool | None = None


class CommentCreate(CamelModel):
    """Request body for adding a comment."""

    text: str | None = None


class Caller(CamelModel):
    """Identity of the user issuing a request.

    Supplied by the identity layer; never verified here.
    """

    id: str
    username: str = ""
    is_admin: bool = False


class LikesResponse(BaseModel):
    """Likes after a toggle."""

    likes: list[str]


class CommentsResponse(BaseModel):
    """Comments remaining after a delete."""

    comments: list[Comment]


class UploadResponse(BaseModel):
    """Result of an image upload."""

    url: str
    filename: str


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: str | None = None
