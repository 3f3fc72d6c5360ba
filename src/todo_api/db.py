from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, List, Optional, Tuple

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import StorageError
from .models import TodoEntity
from .repositories import Repository
from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def connect_collection(settings: Settings) -> Tuple[MongoClient, Collection]:
    """
    Open a client for settings.mongo_url, ping the server and return the
    client together with the configured todo collection.

    Raises StorageError when the URL is invalid or the server cannot be
    reached; a client that was opened is closed before raising.
    """
    client: Optional[MongoClient] = None
    try:
        client = MongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        )
        client.admin.command("ping")
    except PyMongoError as exc:
        if client is not None:
            client.close()
        raise StorageError(str(exc)) from exc

    collection = client[settings.mongo_database][settings.mongo_collection]
    logger.info("Connected to MongoDB collection %s.%s", settings.mongo_database, settings.mongo_collection)
    return client, collection


@contextmanager
def _storage_call(operation: str) -> Generator[None, None, None]:
    try:
        yield
    except PyMongoError as exc:
        logger.error("MongoDB %s failed: %s", operation, exc)
        raise StorageError(str(exc)) from exc


class MongoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface.

    Each method is a single driver call on the injected collection. The
    collection (and its client) is shared by all requests; pymongo clients
    are safe for concurrent use.
    """

    backend_name = "mongo"

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    def _to_entity(self, doc: dict) -> TodoEntity:
        return {
            "_id": doc["_id"],
            "completed": bool(doc.get("completed", False)),
            "body": str(doc.get("body", "")),
        }

    def find_all(self) -> List[TodoEntity]:
        with _storage_call("find"):
            return [self._to_entity(doc) for doc in self._collection.find({})]

    def insert(self, body: str) -> TodoEntity:
        doc = {"completed": False, "body": body}
        with _storage_call("insert_one"):
            result = self._collection.insert_one(doc)
        return {"_id": result.inserted_id, "completed": False, "body": body}

    def mark_completed(self, todo_id: ObjectId) -> None:
        with _storage_call("update_one"):
            self._collection.update_one({"_id": todo_id}, {"$set": {"completed": True}})

    def delete(self, todo_id: ObjectId) -> None:
        with _storage_call("delete_one"):
            self._collection.delete_one({"_id": todo_id})

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
