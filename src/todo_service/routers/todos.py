from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from ..schemas import TodoCreate, TodoOut, TodoReplace
from ..service import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

_ERROR_RESPONSES = {
    400: {"description": "Validation error"},
    500: {"description": "Store or serialization failure"},
}


def get_service(request: Request) -> TodoService:
    """
    Build a TodoService over the store opened by the application lifespan.
    """
    return TodoService(request.app.state.store, clock=request.app.state.clock)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item. The server assigns id, created and updated.",
    responses={201: {"description": "Todo created successfully"}, **_ERROR_RESPONSES},
)
def create_todo(payload: TodoCreate, service: TodoService = Depends(get_service)) -> JSONResponse:
    """
    Create a new Todo.
    """
    created = service.create(payload)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=created)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description=(
        "List todos with optional status filter and pagination.\n\n"
        "Query parameters:\n"
        "- page: 1-based page number (default 1)\n"
        "- size: items per page (default 10, max 1000)\n"
        "- page * size may not exceed 100000\n"
        "- status: only return todos whose status equals this value\n"
        "- sort: accepted but not supported; results are returned in store order"
    ),
    responses={200: {"description": "List retrieved successfully"}, **_ERROR_RESPONSES},
)
def list_todos(
    page: int = Query(1, ge=1, description="Page number, starting from 1"),
    size: int = Query(10, ge=1, le=1000, description="Items per page"),
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status to filter by"),
    sort: Optional[str] = Query(None, description="Not supported; ignored"),
    service: TodoService = Depends(get_service),
) -> JSONResponse:
    """
    List todos with pagination and filters.
    """
    items = service.list(page=page, size=size, status=status_filter, sort=sort)
    return JSONResponse(content=items)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
        **_ERROR_RESPONSES,
    },
)
def get_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> JSONResponse:
    """
    Retrieve a single Todo item by its ID.
    """
    return JSONResponse(content=service.get(todo_id))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update Todo",
    description=(
        "Replace title, description and status of an existing Todo item. "
        "An id in the body must match the path id."
    ),
    responses={
        204: {"description": "Todo updated"},
        404: {"description": "Todo not found"},
        **_ERROR_RESPONSES,
    },
)
def update_todo(todo_id: UUID, payload: TodoReplace, service: TodoService = Depends(get_service)) -> Response:
    service.update(todo_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID. Deleting a missing item also succeeds.",
    responses={204: {"description": "Todo deleted"}, **_ERROR_RESPONSES},
)
def delete_todo(todo_id: UUID, service: TodoService = Depends(get_service)) -> Response:
    """
    Delete a Todo. Returns 204 whether or not the item existed.
    """
    service.delete(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
