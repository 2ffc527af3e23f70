from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import islice
from threading import RLock
from typing import Dict, List, Optional
from uuid import UUID

from .errors import StoreError
from .models import TodoEntity
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing todos.
    """
    limit: int = 10
    offset: int = 0
    status: Optional[str] = None


# PUBLIC_INTERFACE
class TodoStore(ABC):
    """
    Abstract contract for todo storage backends.

    Implementations are shared by all concurrent requests and must be safe to
    call from several threads. Driver failures surface as ``StoreError``.
    """

    @abstractmethod
    def insert(self, entity: TodoEntity) -> None:
        """Persist a fully populated TodoEntity."""

    @abstractmethod
    def get(self, todo_id: UUID) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def update(self, todo_id: UUID, title: str, description: str, status: str, updated: int) -> bool:
        """Overwrite the mutable fields of an existing todo. Return False if it does not exist."""

    @abstractmethod
    def delete(self, todo_id: UUID) -> None:
        """Delete a TodoEntity by id. Deleting a missing id is not an error."""

    @abstractmethod
    def list(self, query: Optional[ListQuery] = None) -> List[TodoEntity]:
        """
        Return one page of TodoEntities.
        - Supports limit/offset
        - Filter by exact status match
        """

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection. Further calls are no-ops."""


class InMemoryStore(TodoStore):
    """
    Thread-safe in-memory store suitable for testing and local runs.
    Rows are kept in insertion order, which gives stable pagination.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[UUID, TodoEntity] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreError("store is closed")

    def insert(self, entity: TodoEntity) -> None:
        with self._lock:
            self._ensure_open()
            self._items[entity["id"]] = entity.copy()  # type: ignore[assignment]

    def get(self, todo_id: UUID) -> Optional[TodoEntity]:
        with self._lock:
            self._ensure_open()
            item = self._items.get(todo_id)
            return None if item is None else item.copy()  # type: ignore[return-value]

    def update(self, todo_id: UUID, title: str, description: str, status: str, updated: int) -> bool:
        with self._lock:
            self._ensure_open()
            existing = self._items.get(todo_id)
            if existing is None:
                return False
            existing["title"] = title
            existing["description"] = description
            existing["status"] = status
            existing["updated"] = updated
            return True

    def delete(self, todo_id: UUID) -> None:
        with self._lock:
            self._ensure_open()
            self._items.pop(todo_id, None)

    def list(self, query: Optional[ListQuery] = None) -> List[TodoEntity]:
        q = query or ListQuery()
        with self._lock:
            self._ensure_open()
            items = iter(self._items.values())
            if q.status:
                items = (t for t in items if t["status"] == q.status)

            start = max(q.offset, 0)
            page = islice(items, start, start + max(q.limit, 0))

            # Return copies to avoid external mutation
            return [t.copy() for t in page]  # type: ignore[misc]

    def close(self) -> None:
        with self._lock:
            self._closed = True


# PUBLIC_INTERFACE
def open_store(settings: Settings) -> TodoStore:
    """
    Open the store configured in settings.
    - memory: InMemoryStore
    - cassandra: CassandraStore connected to the configured cluster and keyspace

    Connection failures propagate to the caller; there is no fallback backend.
    """
    if settings.persistence_backend == "cassandra":
        from .db import CassandraStore

        return CassandraStore.connect(
            contact_points=settings.cassandra_contact_points,
            port=settings.cassandra_port,
            keyspace=settings.cassandra_keyspace,
            create_schema=settings.cassandra_create_schema,
        )
    logger.info("Using in-memory todo store")
    return InMemoryStore()
