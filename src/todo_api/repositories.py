from __future__ import annotations

import re
from abc import ABC, abstractmethod
from threading import RLock
from typing import List, Optional

from bson import ObjectId

from .errors import InvalidIdentifierError
from .models import TodoEntity
from .settings import Settings, get_settings

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


# PUBLIC_INTERFACE
def parse_todo_id(raw: Optional[str]) -> ObjectId:
    """
    Convert a client supplied id into an ObjectId.

    Raises InvalidIdentifierError for a missing id or anything that is not a
    24 character hex string.
    """
    if not raw or not _OBJECT_ID_RE.fullmatch(raw):
        raise InvalidIdentifierError()
    return ObjectId(raw)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    backend_name: str = "abstract"

    @abstractmethod
    def find_all(self) -> List[TodoEntity]:
        """Return every TodoEntity in storage-defined order."""

    @abstractmethod
    def insert(self, body: str) -> TodoEntity:
        """Persist a new, incomplete todo and return it with its assigned id."""

    @abstractmethod
    def mark_completed(self, todo_id: ObjectId) -> None:
        """Set completed=true on the matching record. No-op if nothing matches."""

    @abstractmethod
    def delete(self, todo_id: ObjectId) -> None:
        """Remove the matching record. No-op if nothing matches."""

    def close(self) -> None:
        """Release backend resources. Default: nothing to release."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and running without a database.
    """

    backend_name = "memory"

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[ObjectId, TodoEntity] = {}

    def find_all(self) -> List[TodoEntity]:
        with self._lock:
            # Return copies to avoid external mutation
            return [t.copy() for t in self._items.values()]

    def insert(self, body: str) -> TodoEntity:
        entity: TodoEntity = {"_id": ObjectId(), "completed": False, "body": body}
        with self._lock:
            self._items[entity["_id"]] = entity
        return entity.copy()

    def mark_completed(self, todo_id: ObjectId) -> None:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is not None:
                existing["completed"] = True

    def delete(self, todo_id: ObjectId) -> None:
        with self._lock:
            self._items.pop(todo_id, None)


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - mongo: MongoRepository; connects and pings the server, raising
      StorageError if it is unreachable
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "memory":
        return InMemoryRepository()

    from .db import MongoRepository, connect_collection

    client, collection = connect_collection(settings)
    return MongoRepository(collection, client=client)
