import uuid

import pytest

from todo_service.errors import ErrorKind, StoreError, TodoServiceError
from todo_service.repositories import InMemoryStore
from todo_service.schemas import TodoCreate, TodoReplace
from todo_service.service import TodoService


class RecordingStore(InMemoryStore):
    def __init__(self):
        super().__init__()
        self.calls = []

    def insert(self, entity):
        self.calls.append("insert")
        super().insert(entity)

    def update(self, todo_id, title, description, status, updated):
        self.calls.append("update")
        return super().update(todo_id, title, description, status, updated)

    def list(self, query=None):
        self.calls.append(query)
        return super().list(query)


@pytest.fixture()
def recording_store():
    return RecordingStore()


@pytest.fixture()
def service(recording_store, clock):
    return TodoService(recording_store, clock=clock)


def test_create_stamps_id_and_timestamps(service, recording_store):
    todo = service.create(TodoCreate(user_id="u1", title="  buy milk  "))
    assert uuid.UUID(todo["id"]).version == 1
    assert todo["created"] == todo["updated"] == 1_700_000_000
    assert todo["title"] == "buy milk"
    assert todo["description"] == ""
    assert recording_store.calls == ["insert"]


def test_get_round_trips_created_record(service):
    created = service.create(TodoCreate(user_id="u1", title="a", description="d", status="done"))
    assert service.get(uuid.UUID(created["id"])) == created


def test_get_missing_is_not_found(service):
    with pytest.raises(TodoServiceError) as info:
        service.get(uuid.uuid1())
    assert info.value.kind is ErrorKind.NOT_FOUND


def test_update_mismatch_never_reaches_store(service, recording_store):
    with pytest.raises(TodoServiceError) as info:
        service.update(uuid.uuid1(), TodoReplace(id=uuid.uuid1(), title="x"))
    assert info.value.kind is ErrorKind.VALIDATION
    assert recording_store.calls == []


def test_update_restamps_only_updated(service):
    created = service.create(TodoCreate(user_id="u1", title="a"))
    tid = uuid.UUID(created["id"])
    service.update(tid, TodoReplace(id=tid, title="b", status="done"))
    service.update(tid, TodoReplace(title="c", status="done"))
    after = service.get(tid)
    assert after["created"] == created["created"]
    assert after["updated"] == created["created"] + 2
    assert after["title"] == "c"


def test_update_missing_is_not_found(service):
    with pytest.raises(TodoServiceError) as info:
        service.update(uuid.uuid1(), TodoReplace(title="x"))
    assert info.value.kind is ErrorKind.NOT_FOUND


def test_delete_twice(service):
    created = service.create(TodoCreate(user_id="u1", title="a"))
    tid = uuid.UUID(created["id"])
    service.delete(tid)
    service.delete(tid)
    with pytest.raises(TodoServiceError):
        service.get(tid)


def test_list_translates_page_to_offset(service, recording_store):
    service.list(page=3, size=4, status="done", sort="created")
    query = recording_store.calls[-1]
    assert query.offset == 8
    assert query.limit == 4
    assert query.status == "done"


def test_list_blank_status_is_no_filter(service, recording_store):
    service.list(status="")
    assert recording_store.calls[-1].status is None


def test_store_errors_become_generic_failures(clock):
    class Broken(InMemoryStore):
        def get(self, todo_id):
            raise StoreError("read timeout on replica 10.0.0.3")

    svc = TodoService(Broken(), clock=clock)
    with pytest.raises(TodoServiceError) as info:
        svc.get(uuid.uuid1())
    assert info.value.kind is ErrorKind.STORE_FAILURE
    assert info.value.message == "Failed to retrieve TODO item"
    assert "10.0.0.3" not in str(info.value)
