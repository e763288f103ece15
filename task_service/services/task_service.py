from datetime import datetime, timezone
from typing import List, Optional

from ..models.task import Task, utc_now
from ..repositories.task_repository import TaskRepository
from ..schemas.task import TaskCreate, TaskUpdate


def convert_datetime_to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert datetime to a naive UTC datetime, the form stored in the tasks table"""
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime, assume UTC already
        return dt

    return dt.astimezone(timezone.utc).replace(tzinfo=None)


class TaskService:
    """Business operations on tasks. Holds no state between calls."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def get_task_by_id(self, task_id: int) -> Optional[Task]:
        return self.repository.find_by_id(task_id)

    def get_tasks_by_username(self, username: str) -> List[Task]:
        return self.repository.find_by_username(username)

    def get_all_tasks(self) -> List[Task]:
        return self.repository.find_all()

    def create_task(self, task_data: TaskCreate) -> Task:
        """Persist a new task; created_at defaults to now when not supplied"""
        task = Task(
            username=task_data.username,
            task_name=task_data.task_name,
            description=task_data.description,
            deadline=convert_datetime_to_utc(task_data.deadline),
            created_at=convert_datetime_to_utc(task_data.created_at) or utc_now(),
        )
        return self.repository.save(task)

    def update_task(self, task_id: int, patch: TaskUpdate) -> bool:
        """
        Overlay the mutable fields of ``patch`` onto an existing task.

        username, id and created_at are never touched.

        Returns:
            bool: True if updated, False if no task has that id
        """
        task = self.repository.find_by_id(task_id)
        if task is None:
            return False

        task.task_name = patch.task_name
        task.description = patch.description
        task.deadline = convert_datetime_to_utc(patch.deadline)
        self.repository.save(task)
        return True

    def delete_task(self, task_id: int) -> bool:
        return self.repository.delete_by_id(task_id)
