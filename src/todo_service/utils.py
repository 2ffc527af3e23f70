from __future__ import annotations

import uuid
from typing import Callable, Tuple

Clock = Callable[[], float]

# Largest number of rows a single list request may read, skipped rows included.
MAX_SCAN_ROWS = 100_000


# PUBLIC_INTERFACE
def new_todo_id() -> uuid.UUID:
    """Return a fresh time-ordered (version 1) UUID, the Cassandra ``timeuuid`` shape."""
    return uuid.uuid1()


# PUBLIC_INTERFACE
def epoch_seconds(clock: Clock) -> int:
    """Read ``clock`` and truncate it to whole epoch seconds."""
    return int(clock())


# PUBLIC_INTERFACE
def page_window(page: int, size: int) -> Tuple[int, int]:
    """
    Translate 1-based page numbering into an (offset, limit) pair.

    Args:
        page: Page number, starting at 1.
        size: Number of items per page.

    Returns:
        Tuple of (offset, limit) where offset is ``(page - 1) * size``.
    """
    page = max(page, 1)
    size = max(size, 0)
    return (page - 1) * size, size
