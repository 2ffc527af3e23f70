from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import ValidationError

from .errors import ErrorKind, StoreError, TodoServiceError
from .models import TodoEntity
from .repositories import ListQuery, TodoStore
from .schemas import TodoCreate, TodoOut, TodoReplace
from .utils import MAX_SCAN_ROWS, Clock, epoch_seconds, new_todo_id, page_window

logger = logging.getLogger(__name__)


class TodoService:
    """
    Lifecycle operations for Todo records.

    Request bodies arrive already validated by the schemas; this layer stamps
    server-owned fields, talks to the store and turns every failure into a
    ``TodoServiceError`` whose message is safe to return to clients.
    """

    def __init__(self, store: TodoStore, clock: Clock = time.time) -> None:
        self._store = store
        self._clock = clock

    def create(self, payload: TodoCreate) -> Dict[str, Any]:
        now = epoch_seconds(self._clock)
        entity: TodoEntity = {
            "id": new_todo_id(),
            "user_id": payload.user_id,
            "title": payload.title,
            "description": payload.description,
            "status": payload.status,
            "created": now,
            "updated": now,
        }
        try:
            self._store.insert(entity)
        except StoreError:
            logger.exception("Error inserting todo item %s", entity["id"])
            raise TodoServiceError(ErrorKind.STORE_FAILURE, "Failed to create TODO item")
        return self.serialize(entity)

    def get(self, todo_id: UUID) -> Dict[str, Any]:
        try:
            entity = self._store.get(todo_id)
        except StoreError:
            logger.exception("Error retrieving todo item %s", todo_id)
            raise TodoServiceError(ErrorKind.STORE_FAILURE, "Failed to retrieve TODO item")
        if entity is None:
            logger.debug("Todo item %s not found", todo_id)
            raise TodoServiceError(ErrorKind.NOT_FOUND, "Todo item not found")
        return self.serialize(entity)

    def update(self, todo_id: UUID, payload: TodoReplace) -> None:
        """
        Overwrite title, description and status and re-stamp ``updated``.
        ``created`` and ``user_id`` are never touched. Updating a missing
        record is rejected rather than creating a partial one.
        """
        if payload.id is not None and payload.id != todo_id:
            logger.debug("Todo ID mismatch: path=%s body=%s", todo_id, payload.id)
            raise TodoServiceError(ErrorKind.VALIDATION, "Todo ID mismatch")

        try:
            applied = self._store.update(
                todo_id,
                title=payload.title,
                description=payload.description,
                status=payload.status,
                updated=epoch_seconds(self._clock),
            )
        except StoreError:
            logger.exception("Error updating todo item %s", todo_id)
            raise TodoServiceError(ErrorKind.STORE_FAILURE, "Failed to update TODO item")
        if not applied:
            logger.debug("Todo item %s not found for update", todo_id)
            raise TodoServiceError(ErrorKind.NOT_FOUND, "Todo item not found")

    def delete(self, todo_id: UUID) -> None:
        try:
            self._store.delete(todo_id)
        except StoreError:
            logger.exception("Error deleting todo item %s", todo_id)
            raise TodoServiceError(ErrorKind.STORE_FAILURE, "Failed to delete TODO item")

    def list(self, page: int = 1, size: int = 10, status: Optional[str] = None, sort: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Return one page of todos, optionally restricted to an exact ``status``.

        ``sort`` is accepted for compatibility but ordering is not supported:
        rows come back in store order.
        """
        if sort:
            logger.debug("Ignoring unsupported sort parameter %r", sort)
        offset, limit = page_window(page, size)
        if offset + limit > MAX_SCAN_ROWS:
            logger.debug("Rejected page window page=%s size=%s", page, size)
            raise TodoServiceError(
                ErrorKind.VALIDATION,
                f"page * size must not exceed {MAX_SCAN_ROWS}",
            )
        query = ListQuery(limit=limit, offset=offset, status=status or None)
        try:
            entities = self._store.list(query)
        except StoreError:
            logger.exception("Error querying todo items (page=%s size=%s status=%r)", page, size, status)
            raise TodoServiceError(ErrorKind.STORE_FAILURE, "Failed to fetch TODO items")
        return [self.serialize(e) for e in entities]

    def serialize(self, entity: TodoEntity) -> Dict[str, Any]:
        """Render an entity as a JSON-ready dict."""
        try:
            return TodoOut.model_validate(entity).model_dump(mode="json")
        except ValidationError:
            logger.exception("Error marshalling todo item %s", entity.get("id"))
            raise TodoServiceError(ErrorKind.SERIALIZATION_FAILURE, "Failed to marshal JSON response")
