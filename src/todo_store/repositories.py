from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import aiosqlite

from .errors import StoreError, TodoNotFoundError
from .models import Status, Todo
from .state import AppState, get_app_state

logger = logging.getLogger(__name__)

# malformed rows, text sqlite cannot encode, ids outside the INTEGER range
_STORE_FAILURES = (aiosqlite.Error, ValueError, OverflowError)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    status: str = "status"


_COLS = _Cols()


def _row_to_todo(row: Any) -> Todo:
    """
    Map a stored row to a Todo. Raises ValueError on malformed data
    (null text columns, unknown status tag) rather than defaulting.
    """
    title = row[_COLS.title]
    description = row[_COLS.description]
    if not isinstance(title, str) or not isinstance(description, str):
        raise ValueError(f"malformed todo row {row[_COLS.id]!r}: title and description must be text")
    return Todo(
        id=int(row[_COLS.id]),
        title=title,
        description=description,
        status=Status.from_db(row[_COLS.status]),
    )


def _keep_if_blank(new: str, old: str) -> str:
    return old if not new.strip() else new


# PUBLIC_INTERFACE
class TodoRepository:
    """
    Async CRUD over the todos table of the published connection pool.

    Every operation first resolves the pool from AppState and raises
    StateUnavailableError when initialization has not succeeded. Store
    failures are raised as StoreError; update/delete attach the record as it
    was before the mutation when the mutation itself fails.
    """

    def __init__(self, state: AppState) -> None:
        self._state = state

    async def create(self, title: str, description: str) -> Todo:
        """Insert a new Incomplete todo and return it with its assigned id."""
        pool = self._state.require_db()
        try:
            async with pool.acquire() as conn:
                rows = await conn.execute_fetchall(
                    f"INSERT INTO {_COLS.table} ({_COLS.title}, {_COLS.description}, {_COLS.status}) "
                    f"VALUES (?, ?, ?) RETURNING {_COLS.id}",
                    (title, description, Status.INCOMPLETE.value),
                )
        except _STORE_FAILURES as e:
            logger.error("insert failed: %s", e)
            raise StoreError(f"Error saving todo: {e}") from e
        new_id = int(list(rows)[0][0])
        return Todo(id=new_id, title=title, description=description, status=Status.INCOMPLETE)

    async def list(self) -> List[Todo]:
        """Return every stored todo, in store order."""
        pool = self._state.require_db()
        try:
            async with pool.acquire() as conn:
                rows = await conn.execute_fetchall(f"SELECT * FROM {_COLS.table}")
            return [_row_to_todo(r) for r in rows]
        except _STORE_FAILURES as e:
            logger.error("listing todos failed: %s", e)
            raise StoreError(f"Failed to get todos {e}") from e

    async def _fetch(self, todo_id: int, context: str) -> Todo:
        pool = self._state.require_db()
        try:
            async with pool.acquire() as conn:
                rows = await conn.execute_fetchall(
                    f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
                )
                rows = list(rows)
            if not rows:
                raise TodoNotFoundError(f"{context}: no todo with id {todo_id}")
            return _row_to_todo(rows[0])
        except _STORE_FAILURES as e:
            logger.error("fetching todo %s failed: %s", todo_id, e)
            raise StoreError(f"{context}: {e}") from e

    async def get(self, todo_id: int) -> Todo:
        """Return the stored todo with this id, or raise TodoNotFoundError."""
        return await self._fetch(todo_id, "Failed to get todo")

    async def update(self, todo: Todo) -> Todo:
        """
        Write title/description/status of todo.id and return what was written.

        Blank (after strip) title or description keeps the stored value;
        status is always replaced.
        """
        previous = await self._fetch(
            todo.id, "Failed to fetch previous todo state (possible data loss)"
        )
        merged = Todo(
            id=todo.id,
            title=_keep_if_blank(todo.title, previous.title),
            description=_keep_if_blank(todo.description, previous.description),
            status=todo.status,
        )
        pool = self._state.require_db()
        try:
            async with pool.acquire() as conn:
                await conn.execute(
                    f"UPDATE {_COLS.table} SET {_COLS.title} = ?, {_COLS.description} = ?, "
                    f"{_COLS.status} = ? WHERE {_COLS.id} = ?",
                    (merged.title, merged.description, merged.status.value, merged.id),
                )
        except _STORE_FAILURES as e:
            logger.error("update of todo %s failed: %s", todo.id, e)
            raise StoreError(f"Failed to update todo: {e}", previous=previous) from e
        return merged

    async def delete(self, todo_id: int) -> None:
        """Remove the todo with this id."""
        previous = await self._fetch(
            todo_id, "Failed to fetch todo for deletion (possible data loss)"
        )
        pool = self._state.require_db()
        try:
            async with pool.acquire() as conn:
                await conn.execute(
                    f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,)
                )
        except _STORE_FAILURES as e:
            logger.error("delete of todo %s failed: %s", todo_id, e)
            raise StoreError(f"Failed to delete todo: {e}", previous=previous) from e


# PUBLIC_INTERFACE
def get_repository() -> TodoRepository:
    """Return a repository bound to the process-wide AppState."""
    return TodoRepository(get_app_state())
