# tests/test_task_repository.py

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from task_service.core.database import Database
from task_service.core.errors import StorageError
from task_service.repositories.task_repository import TaskRepository


def test_save_assigns_id_and_round_trips(database: Database, repository: TaskRepository, make_task) -> None:
    task = repository.save(make_task())
    assert task.id is not None and task.id > 0

    # fresh session, so nothing comes from the identity map
    with database.session() as other:
        loaded = TaskRepository(other).find_by_id(task.id)
        assert loaded is not None
        assert loaded.username == "alice"
        assert loaded.task_name == "Buy milk"
        assert loaded.description == "2 litres"
        assert loaded.deadline == datetime(2025, 1, 1, 10, 0, 0)
        assert loaded.created_at == datetime(2024, 12, 1, 8, 30, 0)


def test_find_by_id_missing_returns_none(repository: TaskRepository) -> None:
    assert repository.find_by_id(12345) is None


def test_find_all_in_insertion_order(repository: TaskRepository, make_task) -> None:
    assert repository.find_all() == []

    first = repository.save(make_task(task_name="first"))
    second = repository.save(make_task(task_name="second", username="bob"))

    assert [t.id for t in repository.find_all()] == [first.id, second.id]


def test_find_by_username_exact_match(repository: TaskRepository, make_task) -> None:
    repository.save(make_task(username="alice", task_name="a1"))
    repository.save(make_task(username="bob", task_name="b1"))
    repository.save(make_task(username="alice", task_name="a2"))
    repository.save(make_task(username="Alice", task_name="other"))

    names = [t.task_name for t in repository.find_by_username("alice")]
    assert names == ["a1", "a2"]
    assert repository.find_by_username("carol") == []


def test_save_existing_task_updates_row(database: Database, repository: TaskRepository, make_task) -> None:
    task = repository.save(make_task())
    task.task_name = "Buy oat milk"
    saved = repository.save(task)

    assert saved.id == task.id
    with database.session() as other:
        assert TaskRepository(other).find_by_id(task.id).task_name == "Buy oat milk"
    assert len(repository.find_all()) == 1


def test_delete_by_id_is_idempotent(repository: TaskRepository, make_task) -> None:
    task = repository.save(make_task())

    assert repository.delete_by_id(task.id) is True
    assert repository.find_by_id(task.id) is None
    assert repository.delete_by_id(task.id) is False


def test_failed_save_rolls_back_and_raises(repository: TaskRepository, make_task) -> None:
    # NOT NULL violation on task_name
    with pytest.raises(StorageError) as excinfo:
        repository.save(make_task(task_name=None))

    assert excinfo.value.__cause__ is not None
    # the session is usable again after the rollback
    assert repository.find_all() == []


def test_read_failure_is_wrapped(repository: TaskRepository, monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(repository.db, "scalars", broken)

    with pytest.raises(StorageError):
        repository.find_all()
    with pytest.raises(StorageError):
        repository.find_by_username("alice")


def test_failed_delete_rolls_back(repository: TaskRepository, make_task, monkeypatch) -> None:
    task = repository.save(make_task())
    rolled_back = []
    original_rollback = repository.db.rollback

    def broken_commit():
        raise OperationalError("DELETE", {}, Exception("connection lost"))

    def tracking_rollback():
        rolled_back.append(True)
        original_rollback()

    monkeypatch.setattr(repository.db, "commit", broken_commit)
    monkeypatch.setattr(repository.db, "rollback", tracking_rollback)

    with pytest.raises(StorageError):
        repository.delete_by_id(task.id)
    assert rolled_back == [True]


def test_out_of_range_id_is_absent(repository: TaskRepository, make_task) -> None:
    task = repository.save(make_task())
    huge = 99999999999999999999

    assert repository.find_by_id(huge) is None
    assert repository.delete_by_id(huge) is False
    # the session is still usable and nothing was removed
    assert [t.id for t in repository.find_all()] == [task.id]


def test_created_at_cannot_be_rewritten(database: Database, repository: TaskRepository, make_task) -> None:
    task = repository.save(make_task())

    task.created_at = datetime(2024, 12, 1, 8, 30, 0)  # same value is allowed
    with pytest.raises(ValueError):
        task.created_at = datetime(2000, 1, 1)

    with database.session() as other:
        assert TaskRepository(other).find_by_id(task.id).created_at == datetime(2024, 12, 1, 8, 30, 0)
