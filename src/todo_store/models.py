from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# largest id an sqlite INTEGER can hold
MAX_ID = 2**63 - 1


# PUBLIC_INTERFACE
class Status(str, Enum):
    """
    Completion state of a todo. Persisted as its tag text.
    """

    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"

    @classmethod
    def from_db(cls, value: object) -> "Status":
        """
        Decode a stored tag. Raises ValueError for anything outside the enum
        instead of falling back to a default.
        """
        if not isinstance(value, str):
            raise ValueError(f"status must be text, got {type(value).__name__}")
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"unknown status {value!r}")


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A snapshot of one row of the todos table.

    Fields:
    - id: store-assigned unsigned integer, immutable once assigned
    - title: free text; blank values are ignored on update
    - description: free text; blank values are ignored on update
    - status: Incomplete or Complete
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "status": "Incomplete",
            }
        },
    )

    id: int = Field(..., ge=0, le=MAX_ID, description="Store-assigned identifier of the todo")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(..., description="Detailed description")
    status: Status = Field(default=Status.INCOMPLETE, description="Completion status")
