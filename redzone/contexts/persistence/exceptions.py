"""Custom exceptions for the persistence context."""

from typing import Optional


class PersistenceUnavailableError(Exception):
    """
    Raised when a storage backend cannot complete a read or write.

    Attributes:
        message: Error description
        key: Key being read or written, if any
        original_error: The underlying OS or database error
    """

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.key = key
        self.original_error = original_error

        parts = [message]
        if key:
            parts.append(f"Key: {key}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
