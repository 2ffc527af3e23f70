import itertools
import os
from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient

# Ensure we default to memory backend for tests to avoid needing a cluster
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from todo_service.main import create_app  # noqa: E402
from todo_service.repositories import InMemoryStore  # noqa: E402


class TickingClock:
    """Fake clock that advances one second on every read."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._ticks = itertools.count(start)

    def __call__(self) -> float:
        return float(next(self._ticks))


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def clock():
    return TickingClock()


@pytest.fixture()
def client(store, clock):
    app = create_app(store=store, clock=clock)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_client():
    """Build a client over an arbitrary store; lifespan runs for each."""
    with ExitStack() as stack:

        def _make(custom_store):
            app = create_app(store=custom_store, clock=TickingClock())
            return stack.enter_context(TestClient(app))

        yield _make
