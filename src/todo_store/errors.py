from __future__ import annotations

from typing import Optional

from .models import Todo


class TodoError(Exception):
    """
    Base error raised by repository operations.

    Carries a human readable message and, for update/delete, the record as it
    was stored before the failed mutation so the caller can restore it.
    """

    kind = "TodoError"

    def __init__(self, message: str, previous: Optional[Todo] = None) -> None:
        super().__init__(message)
        self.message = message
        self.previous = previous

    # PUBLIC_INTERFACE
    def to_payload(self) -> dict:
        """Serialize to the JSON body returned to the host."""
        return {
            "error": self.kind,
            "message": self.message,
            "previous": self.previous.model_dump(mode="json") if self.previous else None,
        }


class StateUnavailableError(TodoError):
    """The database has not been initialized, or initialization failed."""

    kind = "StateUnavailable"

    def __init__(self, message: str = "Database is not initialized (no managed state)") -> None:
        super().__init__(message)


class TodoNotFoundError(TodoError):
    """No row exists for the requested id. Never carries a snapshot."""

    kind = "NotFound"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class StoreError(TodoError):
    """The store rejected or failed a query."""

    kind = "StoreError"
