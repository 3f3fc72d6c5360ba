from __future__ import annotations

import logging
from typing import List, Optional

from .errors import TodoValidationError
from .repositories import Repository, parse_todo_id
from .schemas import SuccessResponse, TodoCreate, TodoOut

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoHandler:
    """
    Translate todo API operations into single repository calls.

    The repository is passed in at construction time and shared by every
    request served by the application.
    """

    def __init__(self, repository: Repository) -> None:
        self._repo = repository

    @property
    def repository(self) -> Repository:
        return self._repo

    def list_todos(self) -> List[TodoOut]:
        """Return every stored todo."""
        return [TodoOut.from_entity(t) for t in self._repo.find_all()]

    def create_todo(self, payload: TodoCreate) -> TodoOut:
        """
        Persist a new todo. The `completed` flag of the payload is ignored.

        Raises:
            TodoValidationError if the body is empty.
        """
        if not payload.body:
            raise TodoValidationError("Todo body cannot be empty")
        created = self._repo.insert(payload.body)
        logger.info("Created todo %s", created["_id"])
        return TodoOut.from_entity(created)

    def complete_todo(self, raw_id: Optional[str]) -> SuccessResponse:
        """
        Mark a todo completed. Unknown ids succeed without changing anything.

        Raises:
            InvalidIdentifierError before touching storage if raw_id is malformed.
        """
        todo_id = parse_todo_id(raw_id)
        self._repo.mark_completed(todo_id)
        logger.info("Completed todo %s", todo_id)
        return SuccessResponse(success=True)

    def delete_todo(self, raw_id: Optional[str]) -> SuccessResponse:
        """
        Delete a todo. Unknown ids succeed without changing anything.

        Raises:
            InvalidIdentifierError before touching storage if raw_id is malformed.
        """
        todo_id = parse_todo_id(raw_id)
        self._repo.delete(todo_id)
        logger.info("Deleted todo %s", todo_id)
        return SuccessResponse(success=True)
