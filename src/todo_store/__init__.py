"""
Todo Store package.

Persistence layer for a single-entity todo list: store initialization, the
async TodoRepository, and a FastAPI surface exposing both to a host.
"""

from .errors import StateUnavailableError, StoreError, TodoError, TodoNotFoundError
from .models import Status, Todo

__all__ = [
    "StateUnavailableError",
    "Status",
    "StoreError",
    "Todo",
    "TodoError",
    "TodoNotFoundError",
]
