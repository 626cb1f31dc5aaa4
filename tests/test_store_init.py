import os

import aiosqlite
import pytest

from todo_store.db import ConnectionPool, initialize_store
from todo_store.errors import StateUnavailableError
from todo_store.repositories import TodoRepository
from todo_store.state import AppState, get_app_state, reset_app_state

pytestmark = pytest.mark.anyio


async def test_creates_directory_and_file(data_dir, state):
    received = []
    state.dbstatus.listen(received.append)

    status = await initialize_store(data_dir, state)
    try:
        assert status.status == "ready"
        assert os.path.isdir(data_dir)
        assert os.path.isfile(os.path.join(data_dir, "data.db"))
        assert state.db is not None
        assert [s.status for s in received] == ["ready"]
        assert state.dbstatus.last == status
    finally:
        await state.close()


async def test_table_created(ready_state, raw_sql):
    cols = [row[1] for row in raw_sql("PRAGMA table_info(todos)")]
    assert cols == ["id", "title", "description", "status"]


async def test_second_initialization_keeps_rows(data_dir):
    first = AppState()
    await initialize_store(data_dir, first)
    created = await TodoRepository(first).create("A", "B")
    await first.close()

    second = AppState()
    status = await initialize_store(data_dir, second)
    try:
        assert status.is_ready
        assert await TodoRepository(second).list() == [created]
    finally:
        await second.close()


async def test_existing_empty_file_is_reused(data_dir, state):
    os.makedirs(data_dir)
    open(os.path.join(data_dir, "data.db"), "w").close()

    status = await initialize_store(data_dir, state)
    try:
        assert status.is_ready
        assert await TodoRepository(state).list() == []
    finally:
        await state.close()


async def test_directory_failure_reports_status(tmp_path, state):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    received = []
    state.dbstatus.listen(received.append)

    status = await initialize_store(str(blocker / "sub"), state)

    assert not status.is_ready
    assert status.status
    assert state.db is None
    assert received == [status]
    with pytest.raises(StateUnavailableError):
        await TodoRepository(state).list()


async def test_corrupt_file_reports_status(data_dir, state):
    os.makedirs(data_dir)
    with open(os.path.join(data_dir, "data.db"), "wb") as f:
        f.write(b"this is not a sqlite database" * 64)

    status = await initialize_store(data_dir, state)

    assert not status.is_ready
    assert "not a database" in status.status
    assert state.db is None


async def test_initialization_is_claimed_once(state):
    assert state.claim_initialization() is True
    assert state.claim_initialization() is False


async def test_pool_is_bounded(ready_state):
    pool = ready_state.db
    assert isinstance(pool, ConnectionPool)
    assert pool.size == 1

    async with pool.acquire() as a:
        async with pool.acquire() as b:
            assert a is not b
            assert pool.size == 2
    # released connections are reused
    async with pool.acquire():
        assert pool.size == 2


async def test_closed_pool_rejects_acquire(ready_state):
    pool = ready_state.db
    await pool.close()
    assert pool.closed
    assert pool.size == 0
    with pytest.raises(aiosqlite.ProgrammingError):
        async with pool.acquire():
            pass


async def test_unusable_directory_name_reports_status(tmp_path, state):
    received = []
    state.dbstatus.listen(received.append)

    status = await initialize_store(str(tmp_path / "bad\0dir"), state)

    assert not status.is_ready
    assert received == [status]
    assert state.db is None


async def test_reset_closes_published_pool(data_dir):
    old = await reset_app_state()
    assert get_app_state() is old
    await initialize_store(data_dir, old)
    pool = old.db

    new = await reset_app_state()

    assert new is get_app_state()
    assert new is not old
    assert new.db is None
    assert old.db is None
    assert pool.closed
    assert pool.size == 0
