from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from ..models import MAX_ID, Todo
from ..repositories import TodoRepository, get_repository
from ..schemas import ErrorOut, TodoCreate, TodoUpdate

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)

_UNAVAILABLE = {503: {"model": ErrorOut, "description": "Database not initialized"}}
_STORE_ERROR = {500: {"model": ErrorOut, "description": "Store error"}}
_NOT_FOUND = {404: {"model": ErrorOut, "description": "Todo not found"}}


def _get_repo(repo: TodoRepository = Depends(get_repository)) -> TodoRepository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=Todo,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Incomplete Todo item and return it with its assigned id.",
    responses={**_UNAVAILABLE, **_STORE_ERROR},
)
async def create_todo(payload: TodoCreate, repo: TodoRepository = Depends(_get_repo)) -> Todo:
    """
    Create a new Todo.
    """
    return await repo.create(payload.title, payload.description)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[Todo],
    summary="List Todos",
    description="List every stored Todo in store order.",
    responses={**_UNAVAILABLE, **_STORE_ERROR},
)
async def list_todos(repo: TodoRepository = Depends(_get_repo)) -> List[Todo]:
    return await repo.list()


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=Todo,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={**_UNAVAILABLE, **_NOT_FOUND, **_STORE_ERROR},
)
async def get_todo(
    todo_id: int = Path(..., ge=0, le=MAX_ID), repo: TodoRepository = Depends(_get_repo)
) -> Todo:
    return await repo.get(todo_id)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=Todo,
    summary="Update Todo",
    description=(
        "Update title, description and status of a Todo item.\n\n"
        "Blank title or description keep the stored value; status is always replaced. "
        "If the write fails, the error body carries the record as it was before the update."
    ),
    responses={**_UNAVAILABLE, **_NOT_FOUND, **_STORE_ERROR},
)
async def update_todo(
    payload: TodoUpdate,
    todo_id: int = Path(..., ge=0, le=MAX_ID),
    repo: TodoRepository = Depends(_get_repo),
) -> Todo:
    return await repo.update(payload.to_todo(todo_id))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description=(
        "Delete a Todo item by ID. If the delete fails, the error body carries the record "
        "that would have been removed."
    ),
    responses={**_UNAVAILABLE, **_NOT_FOUND, **_STORE_ERROR},
)
async def delete_todo(
    todo_id: int = Path(..., ge=0, le=MAX_ID), repo: TodoRepository = Depends(_get_repo)
) -> Response:
    """
    Delete a Todo. Returns 204 on success.
    """
    await repo.delete(todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
