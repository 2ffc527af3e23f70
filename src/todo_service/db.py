from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from threading import Lock
from typing import Any, Iterable, List, Mapping, Optional, Sequence
from uuid import UUID

from .errors import StoreError
from .models import TodoEntity
from .repositories import ListQuery, TodoStore

logger = logging.getLogger(__name__)

_COLUMNS = "id, user_id, title, description, status, created, updated"


@dataclass(frozen=True)
class _Cql:
    create_table: str = (
        "CREATE TABLE IF NOT EXISTS todos ("
        "id timeuuid PRIMARY KEY, user_id text, title text, description text, "
        "status text, created bigint, updated bigint)"
    )
    insert: str = f"INSERT INTO todos ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)"
    select_one: str = f"SELECT {_COLUMNS} FROM todos WHERE id = ?"
    update: str = "UPDATE todos SET title = ?, description = ?, status = ?, updated = ? WHERE id = ? IF EXISTS"
    delete: str = "DELETE FROM todos WHERE id = ?"
    # CQL has no OFFSET: LIMIT binds offset + page size and the leading rows are skipped client-side.
    select_page: str = f"SELECT {_COLUMNS} FROM todos LIMIT ?"
    select_page_by_status: str = f"SELECT {_COLUMNS} FROM todos WHERE status = ? LIMIT ? ALLOW FILTERING"


CQL = _Cql()


def _row_to_entity(row: Mapping[str, Any]) -> TodoEntity:
    return {
        "id": row["id"],
        "user_id": row["user_id"],
        "title": row["title"],
        "description": row["description"] if row["description"] is not None else "",
        "status": row["status"] if row["status"] is not None else "",
        "created": int(row["created"]),
        "updated": int(row["updated"]),
    }


class CassandraStore(TodoStore):
    """
    Todo store on a Cassandra/ScyllaDB cluster.

    Every statement is prepared once and executed with bound values; user input
    never becomes part of the CQL text. The driver session is thread-safe and
    pools its own connections, so one instance serves all requests.
    """

    def __init__(self, session: Any, cluster: Any = None) -> None:
        self._session = session
        self._cluster = cluster
        self._close_lock = Lock()
        self._closed = False
        self._insert = session.prepare(CQL.insert)
        self._select_one = session.prepare(CQL.select_one)
        self._update = session.prepare(CQL.update)
        self._delete = session.prepare(CQL.delete)
        self._select_page = session.prepare(CQL.select_page)
        self._select_page_by_status = session.prepare(CQL.select_page_by_status)

    @classmethod
    def connect(
        cls,
        contact_points: Sequence[str],
        port: int,
        keyspace: str,
        create_schema: bool = False,
    ) -> "CassandraStore":
        """
        Connect to the cluster and bind the session to ``keyspace``.

        Raises whatever the driver raises when the cluster is unreachable;
        startup treats that as fatal.
        """
        from cassandra.cluster import Cluster
        from cassandra.query import dict_factory

        cluster = Cluster(contact_points=list(contact_points), port=port)
        try:
            session = cluster.connect(keyspace)
            session.row_factory = dict_factory
            if create_schema:
                session.execute(CQL.create_table)
            store = cls(session, cluster=cluster)
        except Exception:
            cluster.shutdown()
            raise
        logger.info("Connected to Cassandra at %s (keyspace=%s)", ",".join(contact_points), keyspace)
        return store

    def _execute(self, op: str, statement: Any, params: Iterable[Any]) -> Any:
        try:
            return self._session.execute(statement, tuple(params))
        except Exception as exc:
            raise StoreError(f"{op} failed: {exc}") from exc

    def insert(self, entity: TodoEntity) -> None:
        self._execute(
            "insert",
            self._insert,
            (
                entity["id"],
                entity["user_id"],
                entity["title"],
                entity["description"],
                entity["status"],
                entity["created"],
                entity["updated"],
            ),
        )

    def get(self, todo_id: UUID) -> Optional[TodoEntity]:
        result = self._execute("select", self._select_one, (todo_id,))
        try:
            row = result.one()
            return None if row is None else _row_to_entity(row)
        except Exception as exc:
            raise StoreError(f"decoding todo {todo_id} failed: {exc}") from exc

    def update(self, todo_id: UUID, title: str, description: str, status: str, updated: int) -> bool:
        result = self._execute("update", self._update, (title, description, status, updated, todo_id))
        return bool(result.was_applied)

    def delete(self, todo_id: UUID) -> None:
        self._execute("delete", self._delete, (todo_id,))

    def list(self, query: Optional[ListQuery] = None) -> List[TodoEntity]:
        q = query or ListQuery()
        offset = max(q.offset, 0)
        limit = max(q.limit, 0)
        if limit == 0:
            return []

        if q.status:
            result = self._execute("list", self._select_page_by_status, (q.status, offset + limit))
        else:
            result = self._execute("list", self._select_page, (offset + limit,))

        # Iterating may fetch further driver pages, so failures here are store failures too.
        try:
            return [_row_to_entity(row) for row in islice(result, offset, offset + limit)]
        except Exception as exc:
            raise StoreError(f"scanning todo page failed: {exc}") from exc

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        if self._cluster is not None:
            self._cluster.shutdown()
        else:
            self._session.shutdown()
        logger.info("Cassandra connection closed")
