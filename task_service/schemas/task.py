"""
Pydantic schemas for Task Service.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class TaskCreate(BaseModel):
    """Schema for creating a task. An incoming id is ignored."""
    username: str = Field(..., alias="userName", min_length=1, max_length=255, description="Owner of the task")
    task_name: str = Field(..., alias="taskName", min_length=1, max_length=255, description="Task name")
    description: Optional[str] = Field(None, description="Task description")
    deadline: datetime = Field(..., description="Task deadline")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp, defaults to now")

    @field_validator("username", "task_name")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    """
    Schema for updating a task.

    Only the mutable fields exist here; userName, id and createdAt sent by
    the client are dropped.
    """
    task_name: str = Field(..., alias="taskName", min_length=1, max_length=255, description="Task name")
    description: Optional[str] = Field(None, description="Task description, null clears it")
    deadline: datetime = Field(..., description="Task deadline")

    @field_validator("task_name")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    class Config:
        populate_by_name = True


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: int = Field(..., description="Task ID")
    username: str = Field(..., alias="userName", description="Owner of the task")
    task_name: str = Field(..., alias="taskName", description="Task name")
    description: Optional[str] = Field(None, description="Task description")
    deadline: Optional[datetime] = Field(None, description="Task deadline")
    created_at: datetime = Field(..., alias="createdAt", description="Task creation timestamp")

    class Config:
        from_attributes = True
        populate_by_name = True
