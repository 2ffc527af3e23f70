from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Outcome categories the HTTP layer knows how to map to status codes."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"
    SERIALIZATION_FAILURE = "serialization_failure"


class TodoServiceError(Exception):
    """
    Raised by the service layer. ``message`` is safe to show to clients; the
    underlying cause, if any, is chained and only ever logged.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class StoreError(Exception):
    """A store backend failed to execute an operation."""
