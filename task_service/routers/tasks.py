import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.errors import NotFoundError, ValidationError
from ..repositories.task_repository import TaskRepository
from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse
from ..services.task_service import TaskService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Task service bound to the request's database session"""
    return TaskService(TaskRepository(db))


@router.get("", response_model=List[TaskResponse])
def get_tasks(
    username: Optional[str] = Header(None),
    service: TaskService = Depends(get_task_service)
):
    """Get all tasks of the user named in the ``username`` header"""
    if username is None or not username.strip():
        raise ValidationError("Username is required in the headers")

    return service.get_tasks_by_username(username)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Get a specific task by ID"""
    task = service.get_task_by_id(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return task


@router.post("", status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a new task"""
    task = service.create_task(task_data)
    logger.info(f"Created task {task.id}")
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/{task_id}")
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service)
):
    """Update the name, description and deadline of a task"""
    if not service.update_task(task_id, task_update):
        raise NotFoundError("Task not found")
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """Delete a task"""
    if not service.delete_task(task_id):
        raise NotFoundError("Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
