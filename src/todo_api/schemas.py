from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import TodoEntity


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    `body` defaults to an empty string so that a missing body reaches the
    handler's emptiness check instead of failing request decoding.
    `completed` is accepted for symmetry with the response shape but ignored.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "body": "buy milk",
            }
        }
    )

    body: str = Field(default="", description="Task text; must not be empty")
    completed: bool = Field(default=False, description="Ignored on create; new todos start incomplete")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "6523f1a2b4c5d6e7f8091a2b",
                "completed": False,
                "body": "buy milk",
            }
        }
    )

    id: Optional[str] = Field(default=None, description="Unique identifier of the todo item (24 hex chars)")
    completed: bool = Field(..., description="Completion status flag")
    body: str = Field(..., description="Task text")

    @classmethod
    def from_entity(cls, entity: TodoEntity) -> "TodoOut":
        """Build the response model from a stored record."""
        raw_id = entity.get("_id")
        return cls(
            id=str(raw_id) if raw_id else None,
            completed=bool(entity.get("completed", False)),
            body=entity.get("body", ""),
        )


# PUBLIC_INTERFACE
class SuccessResponse(BaseModel):
    """Acknowledgement returned by update and delete."""

    model_config = ConfigDict(json_schema_extra={"example": {"success": True}})

    success: bool = Field(default=True, description="Always true when the operation was accepted")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """
    Error body used for every non-2xx response produced by the application.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "InvalidIdentifier", "message": "Invalid ID"}}
    )

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human readable error message")
