"""Error taxonomy for Travel Journal.

Every component raises one of these instead of returning sentinel values.
The HTTP layer maps each class to a stable status code and a message that
never leaks credentials or stack traces (see app exception handlers in
``travel_journal.main``).

Examples:
    >>> from travel_journal.errors import NotFoundError
    >>> err = NotFoundError("Journal entry", "abc")
    >>> err.status_code, err.message
    (404, 'Journal entry not found: abc')
"""

from __future__ import annotations


class JournalError(Exception):
    """Base class for all expected, typed failures."""

    status_code: int = 500
    public_message: str | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    @property
    def response_message(self) -> str:
        """Message safe to show to API clients."""
        return self.public_message or self.message


class ValidationError(JournalError):
    """Missing or malformed required entry fields."""

    status_code = 400


class MalformedRequestError(JournalError):
    """Unparseable multipart body or missing boundary."""

    status_code = 400


class AuthenticationRequiredError(JournalError):
    """Operation needs a caller identity but none was supplied."""

    status_code = 401
    public_message = "Please sign in to interact"


class PermissionDeniedError(JournalError):
    """Caller may not view or manage the entry."""

    status_code = 403
    public_message = "Not allowed"


class NotFoundError(JournalError):
    """Referenced entry is absent where existence was required."""

    status_code = 404

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ConfigurationError(JournalError):
    """Storage credentials absent or invalid. Never retried automatically."""

    status_code = 500
    public_message = "Storage is not configured"


class StorageUnavailableError(JournalError):
    """Transient backend failure. Callers may retry with backoff."""

    status_code = 503
    public_message = "Storage is temporarily unavailable"
