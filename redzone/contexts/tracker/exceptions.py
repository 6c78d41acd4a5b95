"""Custom exceptions for the tracker context."""

from typing import Optional


class InvalidEntityError(ValueError):
    """
    Exception raised when serialized data does not match an entity's schema.

    Attributes:
        message: Error description
        entity: Entity type being parsed (e.g., 'School')
        field_name: Offending field, if known
    """

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.message = message
        self.entity = entity
        self.field_name = field_name

        prefix = entity or "entity"
        if field_name:
            prefix = f"{prefix}.{field_name}"
        super().__init__(f"{prefix}: {message}")


class ProfileImportError(Exception):
    """
    Exception raised when an imported profile payload is rejected.

    The current profile is never modified when this is raised.

    Attributes:
        message: Error description shown to the user
        payload_snippet: Start of the rejected payload
        original_error: The JSON or schema error that caused the rejection
    """

    def __init__(
        self,
        message: str,
        payload_snippet: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.payload_snippet = payload_snippet
        self.original_error = original_error

        parts = [message]

        if original_error:
            parts.append(f"Reason: {original_error}")

        if payload_snippet:
            snippet = payload_snippet[:200] + "..." if len(payload_snippet) > 200 else payload_snippet
            parts.append(f"\nPayload:\n{snippet}")

        super().__init__("\n".join(parts))
