import uuid

import pytest

from todo_service.errors import StoreError
from todo_service.repositories import InMemoryStore, ListQuery, open_store
from todo_service.settings import get_settings


def make_entity(title="t", status="", created=100):
    return {
        "id": uuid.uuid1(),
        "user_id": "u1",
        "title": title,
        "description": "",
        "status": status,
        "created": created,
        "updated": created,
    }


def test_get_returns_copy(store):
    entity = make_entity()
    store.insert(entity)
    fetched = store.get(entity["id"])
    fetched["title"] = "mutated"
    assert store.get(entity["id"])["title"] == "t"


def test_insert_keeps_caller_dict_independent(store):
    entity = make_entity()
    store.insert(entity)
    entity["title"] = "changed later"
    assert store.get(entity["id"])["title"] == "t"


def test_update_reports_missing(store):
    assert store.update(uuid.uuid1(), "a", "", "", 1) is False


def test_update_keeps_created_and_owner(store):
    entity = make_entity(created=100)
    store.insert(entity)
    assert store.update(entity["id"], "new", "desc", "done", 150) is True
    after = store.get(entity["id"])
    assert after["created"] == 100
    assert after["updated"] == 150
    assert after["user_id"] == "u1"
    assert (after["title"], after["description"], after["status"]) == ("new", "desc", "done")


def test_delete_missing_is_noop(store):
    store.delete(uuid.uuid1())


def test_list_offset_limit_and_filter(store):
    entities = [make_entity(title=str(i), status="done" if i % 3 == 0 else "open") for i in range(9)]
    for e in entities:
        store.insert(e)

    page = store.list(ListQuery(limit=4, offset=2))
    assert [t["title"] for t in page] == ["2", "3", "4", "5"]

    done = store.list(ListQuery(limit=10, offset=0, status="done"))
    assert [t["title"] for t in done] == ["0", "3", "6"]

    assert store.list(ListQuery(limit=2, offset=1, status="done")) == [
        dict(entities[3]),
        dict(entities[6]),
    ]
    assert store.list(ListQuery(limit=0)) == []


def test_closed_store_refuses_work(store):
    store.close()
    store.close()
    assert store.closed
    with pytest.raises(StoreError):
        store.get(uuid.uuid1())
    with pytest.raises(StoreError):
        store.list()


def test_open_store_memory(monkeypatch):
    monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
    assert isinstance(open_store(get_settings()), InMemoryStore)
