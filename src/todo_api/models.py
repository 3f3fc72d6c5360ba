from __future__ import annotations

from typing import TypedDict

from bson import ObjectId


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A Todo record as stored in the collection.

    Fields:
    - _id: ObjectId assigned by storage on insert, never changed afterwards
    - completed: Boolean completion flag (false until completed)
    - body: Non-empty task text, never changed after creation
    """

    _id: ObjectId
    completed: bool
    body: str
