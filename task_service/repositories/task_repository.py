"""
Persistence gateway for Task entities.

The repository is the only layer that talks to the store and the only
layer that rolls back. Every failure surfaces as ``StorageError``.
"""
import logging
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import StorageError
from ..models.task import Task

logger = logging.getLogger(__name__)


class TaskRepository:
    """CRUD operations on tasks over an injected SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Task]:
        """
        Get every task in insertion order.

        Returns:
            list: all tasks, empty if there are none
        """
        try:
            return list(self.db.scalars(select(Task).order_by(Task.id)))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch all tasks: {e}")
            raise StorageError("Failed to fetch all tasks") from e

    def find_by_id(self, task_id: int) -> Optional[Task]:
        """
        Get a task by its ID.

        Returns:
            Task if found, None otherwise
        """
        try:
            return self.db.get(Task, task_id)
        except OverflowError:
            # id outside the store's integer range cannot exist
            self.db.rollback()
            return None
        except SQLAlchemyError as e:
            logger.error(f"Failed to find task {task_id}: {e}")
            raise StorageError("Failed to find task by ID") from e

    def find_by_username(self, username: str) -> List[Task]:
        """Get the tasks owned by ``username`` (exact match), empty list if none."""
        try:
            query = select(Task).where(Task.username == username).order_by(Task.id)
            return list(self.db.scalars(query))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch tasks for user '{username}': {e}")
            raise StorageError("Failed to fetch tasks by username") from e

    def save(self, task: Task) -> Task:
        """
        Insert a new task or update an existing one in a single transaction.

        A task without an id is inserted and gets one assigned by the store;
        otherwise it is merged onto the row with the same id.

        Returns:
            Task: the persistent instance

        Raises:
            StorageError: if the write fails, after rolling back
        """
        try:
            if task.id is None:
                self.db.add(task)
            else:
                task = self.db.merge(task)
            self.db.commit()
            self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save task: {e}")
            raise StorageError("Failed to save task") from e

        logger.info(f"Saved task {task.id} for user '{task.username}'")
        return task

    def delete_by_id(self, task_id: int) -> bool:
        """
        Delete a task by its ID.

        Returns:
            bool: True if a row was removed, False if no task had that id
        """
        try:
            task = self.db.get(Task, task_id)
            if task is None:
                self.db.commit()
                return False
            self.db.delete(task)
            self.db.commit()
        except OverflowError:
            self.db.rollback()
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {e}")
            raise StorageError("Failed to delete task by ID") from e

        logger.info(f"Deleted task {task_id}")
        return True
