# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from task_service.core.config import Settings
from task_service.core.database import Database
from task_service.main import create_app
from task_service.models.task import Task
from task_service.repositories.task_repository import TaskRepository
from task_service.services.task_service import TaskService


@pytest.fixture()
def database() -> Iterator[Database]:
    """
    In-memory SQLite store shared by every session of one test.

    StaticPool keeps a single connection so the TestClient's worker thread
    sees the same database as the test body.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine)
    assert db.init_db()
    yield db
    db.dispose()


@pytest.fixture()
def session(database: Database) -> Iterator[Session]:
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def repository(session: Session) -> TaskRepository:
    return TaskRepository(session)


@pytest.fixture()
def service(repository: TaskRepository) -> TaskService:
    return TaskService(repository)


@pytest.fixture()
def app(database: Database) -> FastAPI:
    return create_app(settings=Settings(), database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_task():
    """Factory for unsaved Task rows with sensible defaults."""

    def _make(**overrides) -> Task:
        fields = dict(
            username="alice",
            task_name="Buy milk",
            description="2 litres",
            deadline=datetime(2025, 1, 1, 10, 0, 0),
            created_at=datetime(2024, 12, 1, 8, 30, 0),
        )
        fields.update(overrides)
        return Task(**fields)

    return _make
