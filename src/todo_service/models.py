from __future__ import annotations

from typing import TypedDict
from uuid import UUID


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A Todo record as held by the store backends.

    Fields:
    - id: time-ordered UUID (version 1), assigned by the service on creation
    - user_id: opaque owner identifier, never changed after creation
    - title: non-empty title
    - description: free text, empty string when not supplied
    - status: free-form status string such as 'pending' or 'done'
    - created: epoch seconds, set once at creation
    - updated: epoch seconds, refreshed on every successful update
    """

    id: UUID
    user_id: str
    title: str
    description: str
    status: str
    created: int
    updated: int
