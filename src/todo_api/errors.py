from __future__ import annotations

from fastapi import status


class TodoError(Exception):
    """
    Base class for errors surfaced to API clients.

    Subclasses fix the HTTP status and the `error` label rendered by the
    application's exception handler.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "TodoError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class TodoValidationError(TodoError):
    """A create request carried an empty body."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "ValidationError"


# PUBLIC_INTERFACE
class InvalidIdentifierError(TodoError):
    """A todo id is not a well-formed identifier."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "InvalidIdentifier"

    def __init__(self, message: str = "Invalid ID") -> None:
        super().__init__(message)


# PUBLIC_INTERFACE
class StorageError(TodoError):
    """The underlying document store failed; message is the driver's."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "StorageError"
