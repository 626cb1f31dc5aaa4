from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Status, Todo


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item. New todos always start Incomplete.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        }
    )

    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(..., description="Detailed description; may be empty")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.

    A blank title or description (empty after trimming) keeps the stored
    value; status always replaces the stored one.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "",
                "description": "Milk, eggs, bread, and paper towels",
                "status": "Complete",
            }
        }
    )

    title: str = Field(default="", description="New title; blank keeps the current one")
    description: str = Field(default="", description="New description; blank keeps the current one")
    status: Status = Field(..., description="New completion status")

    def to_todo(self, todo_id: int) -> Todo:
        return Todo(id=todo_id, title=self.title, description=self.description, status=self.status)


# PUBLIC_INTERFACE
class ErrorOut(BaseModel):
    """
    Error body returned for repository failures.
    """

    error: str = Field(..., description="StateUnavailable, NotFound or StoreError")
    message: str = Field(..., description="Human readable cause")
    previous: Optional[Todo] = Field(
        default=None, description="Record as stored before the failed mutation, if known"
    )


# PUBLIC_INTERFACE
class DbStatusOut(BaseModel):
    """
    Last readiness signal; status is null until initialization has reported.
    """

    status: Optional[str] = Field(default=None, description="'ready', an error text, or null")
