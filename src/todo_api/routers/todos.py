from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from ..handler import TodoHandler
from ..schemas import ErrorResponse, SuccessResponse, TodoCreate, TodoOut

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)

_invalid_id = {400: {"model": ErrorResponse, "description": "Malformed todo id"}}
_storage_failure = {500: {"model": ErrorResponse, "description": "Storage failure"}}


def get_handler(request: Request) -> TodoHandler:
    """
    Dependency returning the TodoHandler wired up by the application lifespan.
    """
    return request.app.state.todo_handler


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    response_model_exclude_none=True,
    summary="List Todos",
    description="Return every todo in the collection, in storage order.",
    responses={**_storage_failure},
)
def list_todos(handler: TodoHandler = Depends(get_handler)) -> List[TodoOut]:
    """
    List all todos.
    """
    return handler.list_todos()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    response_model_exclude_none=True,
    summary="Create Todo",
    description="Create a new todo from a non-empty body and return it with its assigned id.",
    responses={
        200: {"description": "Todo created successfully"},
        400: {"model": ErrorResponse, "description": "Empty body or undecodable request"},
        **_storage_failure,
    },
)
def create_todo(payload: TodoCreate, handler: TodoHandler = Depends(get_handler)) -> TodoOut:
    """
    Create a new Todo.
    """
    return handler.create_todo(payload)


# PUBLIC_INTERFACE
@router.patch(
    "",
    response_model=SuccessResponse,
    summary="Complete Todo",
    description=(
        "Mark the todo identified by the `id` query parameter as completed. "
        "Succeeds even when no todo has that id."
    ),
    responses={**_invalid_id, **_storage_failure},
)
def complete_todo(
    id: Optional[str] = Query(None, description="Todo id (24 hex characters)"),
    handler: TodoHandler = Depends(get_handler),
) -> SuccessResponse:
    """
    Set completed=true on a todo.
    """
    return handler.complete_todo(id)


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=SuccessResponse,
    summary="Delete Todo",
    description=(
        "Delete the todo identified by the `id` query parameter. "
        "Succeeds even when no todo has that id."
    ),
    responses={**_invalid_id, **_storage_failure},
)
def delete_todo(
    id: Optional[str] = Query(None, description="Todo id (24 hex characters)"),
    handler: TodoHandler = Depends(get_handler),
) -> SuccessResponse:
    """
    Delete a todo.
    """
    return handler.delete_todo(id)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=SuccessResponse,
    summary="Complete Todo (path id)",
    description="Same as PATCH /api/todos?id=..., with the id in the path.",
    responses={**_invalid_id, **_storage_failure},
)
def complete_todo_by_path(todo_id: str, handler: TodoHandler = Depends(get_handler)) -> SuccessResponse:
    """Set completed=true on the todo named in the path."""
    return handler.complete_todo(todo_id)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=SuccessResponse,
    summary="Delete Todo (path id)",
    description="Same as DELETE /api/todos?id=..., with the id in the path.",
    responses={**_invalid_id, **_storage_failure},
)
def delete_todo_by_path(todo_id: str, handler: TodoHandler = Depends(get_handler)) -> SuccessResponse:
    """Delete the todo named in the path."""
    return handler.delete_todo(todo_id)
