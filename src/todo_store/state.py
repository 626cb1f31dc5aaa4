from __future__ import annotations

from typing import Optional

from .db import ConnectionPool
from .errors import StateUnavailableError
from .events import StatusChannel


# PUBLIC_INTERFACE
class AppState:
    """
    Process-wide state shared by all repository operations.

    - db: the connection pool, present only after a successful initialization
    - dbstatus: channel carrying the readiness signal
    """

    def __init__(self) -> None:
        self.db: Optional[ConnectionPool] = None
        self.dbstatus = StatusChannel()
        self._init_claimed = False

    def claim_initialization(self) -> bool:
        """Return True exactly once; later callers must not initialize again."""
        if self._init_claimed:
            return False
        self._init_claimed = True
        return True

    def publish_db(self, pool: ConnectionPool) -> None:
        self.db = pool

    def require_db(self) -> ConnectionPool:
        if self.db is None:
            raise StateUnavailableError()
        return self.db

    async def close(self) -> None:
        pool, self.db = self.db, None
        if pool is not None:
            await pool.close()


_state: Optional[AppState] = None


# PUBLIC_INTERFACE
def get_app_state() -> AppState:
    """Return the process-wide AppState, creating it on first use."""
    global _state
    if _state is None:
        _state = AppState()
    return _state


# PUBLIC_INTERFACE
async def reset_app_state() -> AppState:
    """Close the process-wide AppState, including any published pool, and replace it with a fresh one."""
    global _state
    old, _state = _state, AppState()
    if old is not None:
        await old.close()
    return _state
