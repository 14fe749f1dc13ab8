"""
Error types raised by the identifier store.

The store only raises these; translating them into HTTP responses and
logging them is left to the routes.
"""

from typing import Optional


class ShortenerError(Exception):
    """
    Base class for store errors.

    Attributes:
        message: Error message (default: "Shortener error")
    """
    message: str = "Shortener error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class PersistenceError(ShortenerError):
    """Talking to or executing against the database failed."""
    message = "Database error"


class NotFoundError(ShortenerError):
    """No mapping exists for the requested short identifier."""
    message = "Not found"

    def __init__(self, short_id: str, message: Optional[str] = None):
        self.short_id = short_id
        super().__init__(message or f"No URL found for id {short_id!r}")
