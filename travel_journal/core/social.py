"""Likes and comments as read-modify-write over the document store.

Every operation re-reads the entry immediately before writing it back and
never trusts likes or comments supplied by a client. There is no revision
token and no lock: two callers mutating the same entry concurrently are
last-write-wins on the whole document, so one of their changes can be lost.
That trade-off is accepted for this low-contention feature and is pinned
down by ``tests/unit/test_social.py::TestLostUpdate``.

Examples:
    >>> from travel_journal.core.social import SocialService
    >>> social = SocialService(store)
    >>> await social.toggle_like(entry_id, "u2")
    ['u2']
    >>> await social.toggle_like(entry_id, "u2")
    []

Tests:
    - tests/unit/test_social.py
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from travel_journal.errors import ValidationError
from travel_journal.schemas import Comment
from travel_journal.store.base import DocumentStore

logger = logging.getLogger(__name__)


class SocialService:
    """Mutates the likes and comments of stored entries.

    Attributes:
        store: Document store holding the entries.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def toggle_like(self, entry_id: str, user_id: str) -> list[str]:
        """Add the user's like, or remove it if already present.

        Args:
            entry_id: Entry to like.
            user_id: Liking user.

        Returns:
            The persisted likes after the toggle.

        Raises:
            NotFoundError: If the entry does not exist.
        """
        entry = await self.store.get(entry_id)

        if user_id in entry.likes:
            likes = [uid for uid in entry.likes if uid != user_id]
        else:
            likes = [*entry.likes, user_id]

        saved = await self.store.replace(entry_id, entry.model_copy(update={"likes": likes}))
        return saved.likes

    async def add_comment(
        self,
        entry_id: str,
        author_id: str,
        author_name: str,
        text: str,
    ) -> Comment:
        """Append a comment to an entry.

        Args:
            entry_id: Entry to comment on.
            author_id: Commenting user id.
            author_name: Display name captured now and never re-synced.
            text: Comment body.

        Returns:
            The created comment.

        Raises:
            ValidationError: If the text is blank.
            NotFoundError: If the entry does not exist.
        """
        if not text or not text.strip():
            raise ValidationError("Comment text is required")

        entry = await self.store.get(entry_id)

        comment = Comment(
            id=f"c{uuid.uuid4().hex}",
            author_id=author_id,
            author_name=author_name,
            text=text.strip(),
            date=datetime.now(timezone.utc).date().isoformat(),
        )
        await self.store.replace(
            entry_id,
            entry.model_copy(update={"comments": [*entry.comments, comment]}),
        )
        logger.info(f"Comment {comment.id} added to {entry_id}")
        return comment

    async def delete_comment(self, entry_id: str, comment_id: str) -> list[Comment]:
        """Remove a comment by id.

        Deleting an unknown comment id still rewrites the entry unchanged.

        Args:
            entry_id: Entry holding the comment.
            comment_id: Comment to remove.

        Returns:
            The persisted comments after removal.

        Raises:
            NotFoundError: If the entry does not exist.
        """
        entry = await self.store.get(entry_id)

        comments = [c for c in entry.comments if c.id != comment_id]
        if len(comments) == len(entry.comments):
            logger.debug(f"Comment {comment_id} already absent from {entry_id}")

        saved = await self.store.replace(entry_id, entry.model_copy(update={"comments": comments}))
        return saved.comments
