"""Pydantic schemas for Task Service."""
from .task import TaskCreate, TaskUpdate, TaskResponse

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse"]
