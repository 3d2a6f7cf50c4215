"""Document store for journal entries.

Examples:
    >>> from travel_journal.store import SqlDocumentStore
    >>> store = SqlDocumentStore(get_session_factory())
    >>> entry = await store.create(EntryCreate(title="Kyoto", ...))
"""

from travel_journal.store.base import DocumentStore, validate_entry_fields
from travel_journal.store.sql import SqlDocumentStore

__all__ = ["DocumentStore", "SqlDocumentStore", "validate_entry_fields"]
