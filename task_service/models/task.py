from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import validates
from ..core.database import Base


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the tasks table"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column("user_name", String(255), nullable=False, index=True)
    task_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Required by the API, nullable in the schema
    deadline = Column(DateTime, nullable=True)

    # Set once on insert, never written by updates
    created_at = Column(DateTime, nullable=False, default=utc_now)

    @validates("created_at")
    def validate_created_at(self, key, value):
        if self.created_at is not None and value != self.created_at:
            raise ValueError("created_at cannot be changed once set")
        return value

    def __repr__(self):
        return (
            f"<Task(id={self.id}, username='{self.username}', task_name='{self.task_name}', "
            f"description='{self.description}', deadline={self.deadline}, created_at={self.created_at})>"
        )
