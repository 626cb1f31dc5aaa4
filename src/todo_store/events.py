from __future__ import annotations

import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DBSTATUS_EVENT = "dbstatus"
READY = "ready"


# PUBLIC_INTERFACE
class DatabaseStatus(BaseModel):
    """Payload of the database readiness signal: 'ready' or an error description."""

    status: str = Field(..., description="'ready' or the initialization error text")

    @property
    def is_ready(self) -> bool:
        return self.status == READY


Listener = Callable[[DatabaseStatus], None]


# PUBLIC_INTERFACE
class StatusChannel:
    """
    Named notification channel for readiness signals.

    Observers register with listen() before the signal fires; the most recent
    value is also kept so late observers can poll it.
    """

    def __init__(self, name: str = DBSTATUS_EVENT) -> None:
        self.name = name
        self._listeners: List[Listener] = []
        self._last: Optional[DatabaseStatus] = None

    @property
    def last(self) -> Optional[DatabaseStatus]:
        return self._last

    def listen(self, callback: Listener) -> Callable[[], None]:
        """Register an observer. Returns a callable that unregisters it."""
        self._listeners.append(callback)

        def _unlisten() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _unlisten

    def emit(self, status: DatabaseStatus) -> None:
        logger.info("emit %s: %s", self.name, status.status)
        self._last = status
        for callback in list(self._listeners):
            callback(status)
