"""Visibility and ownership rules for journal entries.

Pure predicates over (entry, caller): no I/O, no persistence side effects.
A caller of ``None`` is anonymous.

Examples:
    >>> from travel_journal.core.access import FeedMode, can_view, visible_set
    >>> can_view(private_entry, None)
    False
    >>> visible_set(entries, admin, FeedMode.DASHBOARD) == entries
    True

Tests:
    - tests/unit/test_access.py
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from travel_journal.schemas import Caller, Entry


class Role(str, Enum):
    """How a caller relates to one entry."""

    ANONYMOUS = "anonymous"
    OWNER = "owner"
    ADMIN = "admin"
    OTHER = "other"


class FeedMode(str, Enum):
    """Which listing the caller asked for.

    - PUBLIC: everything the caller may view
    - DASHBOARD: the caller's own entries (all entries for an admin)
    """

    PUBLIC = "public"
    DASHBOARD = "dashboard"


def role_for(entry: Entry, caller: Caller | None) -> Role:
    """Classify the caller relative to an entry.

    An admin who also wrote the entry is reported as OWNER; both roles
    grant the same rights.
    """
    if caller is None:
        return Role.ANONYMOUS
    if caller.id == entry.author_id:
        return Role.OWNER
    if caller.is_admin:
        return Role.ADMIN
    return Role.OTHER


def can_view(entry: Entry, caller: Caller | None) -> bool:
    """Public entries are visible to all; private ones to owner and admins."""
    if not entry.is_private:
        return True
    return role_for(entry, caller) in (Role.OWNER, Role.ADMIN)


def can_manage(entry: Entry, caller: Caller | None) -> bool:
    """Only the author or an admin may edit, delete or moderate comments."""
    return role_for(entry, caller) in (Role.OWNER, Role.ADMIN)


def visible_set(
    entries: Iterable[Entry],
    caller: Caller | None,
    mode: FeedMode = FeedMode.PUBLIC,
) -> list[Entry]:
    """Filter entries for a listing, preserving their order.

    Args:
        entries: Entries in display order.
        caller: Requesting user, or None when anonymous.
        mode: PUBLIC feed or personal DASHBOARD.

    Returns:
        The entries the caller should see.
    """
    if mode == FeedMode.PUBLIC:
        return [e for e in entries if can_view(e, caller)]

    if caller is None:
        return []
    if caller.is_admin:
        # Moderation view
        return list(entries)
    return [e for e in entries if e.author_id == caller.id]
