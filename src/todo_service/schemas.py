from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(value: str, field: str) -> str:
    s = value.strip()
    if not s:
        raise ValueError(f"{field} must not be empty")
    return s


def _null_to_empty(value: Optional[str]) -> str:
    return "" if value is None else value


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Any ``id``, ``created`` or ``updated`` sent by the client is ignored; those
    fields are always assigned by the server.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "user_id": "u1",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "status": "pending",
            }
        }
    )

    user_id: str = Field(..., description="Identifier of the owning user", min_length=1)
    title: str = Field(..., description="Short title for the todo item", min_length=1)
    description: Optional[str] = Field(default="", description="Optional detailed description")
    status: Optional[str] = Field(default="", description="Free-form status, e.g. 'pending' or 'done'")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and reject blank titles.
        """
        return _require_text(v, "title")

    @field_validator("description", "status", mode="before")
    @classmethod
    def default_blank(cls, v: Optional[str]) -> str:
        """
        Treat an explicit null like an omitted field.
        """
        return _null_to_empty(v)


# PUBLIC_INTERFACE
class TodoReplace(BaseModel):
    """
    Schema for updating an existing Todo item.

    Only title, description and status are written. ``id`` may be echoed back by
    the client and must then match the path identifier; ``user_id`` and the
    timestamps are immutable and ignored if present.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5b6f2a3e-8c1d-11ee-b9d1-0242ac120002",
                "title": "Buy groceries and supplies",
                "description": "Milk, eggs, bread, and paper towels",
                "status": "done",
            }
        }
    )

    id: Optional[UUID] = Field(default=None, description="Must equal the path identifier when present")
    title: str = Field(..., description="Short title for the todo item", min_length=1)
    description: Optional[str] = Field(default="", description="Optional detailed description")
    status: Optional[str] = Field(default="", description="Free-form status, e.g. 'pending' or 'done'")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "title")

    @field_validator("description", "status", mode="before")
    @classmethod
    def default_blank(cls, v: Optional[str]) -> str:
        """
        Treat an explicit null like an omitted field.
        """
        return _null_to_empty(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5b6f2a3e-8c1d-11ee-b9d1-0242ac120002",
                "user_id": "u1",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "status": "pending",
                "created": 1700000000,
                "updated": 1700000420,
            }
        }
    )

    id: UUID = Field(..., description="Time-ordered unique identifier of the todo item")
    user_id: str = Field(..., description="Identifier of the owning user")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(..., description="Detailed description, possibly empty")
    status: str = Field(..., description="Free-form status")
    created: int = Field(..., description="Creation time in epoch seconds")
    updated: int = Field(..., description="Last update time in epoch seconds")
