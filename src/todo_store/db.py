from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, List, Optional

import aiosqlite

from .events import READY, DatabaseStatus
from .settings import get_db_path

if TYPE_CHECKING:
    from .state import AppState

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONNECTIONS = 10

CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id INTEGER PRIMARY KEY,
    title TEXT,
    description TEXT,
    status TEXT
)
"""


class ConnectionPool:
    """
    Bounded pool of aiosqlite connections to a single database file.

    Connections run in autocommit mode, so each statement is its own atomic
    transaction. Connections are opened lazily up to max_connections; callers
    beyond the bound wait until one is released.
    """

    def __init__(self, db_path: str, max_connections: int = DEFAULT_MAX_CONNECTIONS) -> None:
        self.db_path = db_path
        self.max_connections = max(1, max_connections)
        self._idle: List[aiosqlite.Connection] = []
        self._opened = 0
        self._slots: Optional[asyncio.Semaphore] = None
        self._closed = False

    @classmethod
    async def connect(
        cls, db_path: str, max_connections: int = DEFAULT_MAX_CONNECTIONS
    ) -> "ConnectionPool":
        """Create a pool and open one connection eagerly to validate the target."""
        pool = cls(db_path, max_connections)
        pool._idle.append(await pool._open())
        return pool

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def size(self) -> int:
        """Number of currently open connections."""
        return self._opened

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        conn.row_factory = aiosqlite.Row
        self._opened += 1
        return conn

    def _semaphore(self) -> asyncio.Semaphore:
        # created on first use so it binds to the running loop
        if self._slots is None:
            self._slots = asyncio.Semaphore(self.max_connections)
        return self._slots

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._closed:
            raise aiosqlite.ProgrammingError("Cannot operate on a closed connection pool")
        async with self._semaphore():
            conn = self._idle.pop() if self._idle else await self._open()
            try:
                yield conn
            finally:
                if self._closed:
                    await self._discard(conn)
                else:
                    self._idle.append(conn)

    async def _discard(self, conn: aiosqlite.Connection) -> None:
        self._opened -= 1
        await conn.close()

    async def close(self) -> None:
        """Close idle connections now; connections in use close on release."""
        self._closed = True
        while self._idle:
            await self._discard(self._idle.pop())


def _ensure_db_file(base_directory: str) -> str:
    os.makedirs(base_directory, exist_ok=True)
    db_path = get_db_path(base_directory)
    logger.info("database path: %s", db_path)
    try:
        with open(db_path, "x"):
            pass
    except FileExistsError:
        logger.info("database file already exists")
    except OSError as e:
        raise OSError(f"Failed to create database file: {e}") from e
    else:
        logger.info("database file created")
    return db_path


# PUBLIC_INTERFACE
async def initialize_store(
    base_directory: str,
    state: "AppState",
    max_connections: int = DEFAULT_MAX_CONNECTIONS,
) -> DatabaseStatus:
    """
    Prepare the database under base_directory and publish its pool.

    Steps:
    - create base_directory (recursively) and base_directory/data.db if absent;
      an existing file is reused untouched
    - open a connection pool to the file
    - create the todos table if it does not exist

    The outcome is emitted on state.dbstatus: 'ready' on success, the error
    text otherwise. Failures are never raised; on failure no pool is
    published. The emitted status is also returned for convenience.
    """
    pool: Optional[ConnectionPool] = None
    try:
        db_path = _ensure_db_file(base_directory)
        pool = await ConnectionPool.connect(db_path, max_connections)
        async with pool.acquire() as conn:
            await conn.execute(CREATE_TODOS_TABLE)
    except (OSError, ValueError, aiosqlite.Error) as e:
        logger.error("database initialization failed: %s", e)
        if pool is not None:
            await pool.close()
        status = DatabaseStatus(status=str(e))
    else:
        state.publish_db(pool)
        status = DatabaseStatus(status=READY)
    state.dbstatus.emit(status)
    return status
