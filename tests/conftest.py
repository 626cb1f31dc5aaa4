import os
import sqlite3
from contextlib import closing

import pytest

from todo_store.db import initialize_store
from todo_store.repositories import TodoRepository
from todo_store.state import AppState


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def data_dir(tmp_path):
    # Not created up front: initialization must create it
    return str(tmp_path / "appdata")


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
async def ready_state(data_dir, state):
    status = await initialize_store(data_dir, state)
    assert status.is_ready, status.status
    yield state
    await state.close()


@pytest.fixture
def repo(ready_state):
    return TodoRepository(ready_state)


@pytest.fixture
def raw_sql(data_dir):
    """Run statements directly against the database file, bypassing the pool."""

    def _run(sql, params=()):
        with closing(sqlite3.connect(os.path.join(data_dir, "data.db"), isolation_level=None)) as conn:
            return conn.execute(sql, params).fetchall()

    return _run
