# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_keeper.cli.bootstrap import create_initial_state
from todo_keeper.core.models import Task, TodoList
from todo_keeper.core.state import AppState
from todo_keeper.persistence.storage import SharedStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic. Delays are tiny so timer
    tests finish quickly.
    """
    return SimpleNamespace(
        app_name="todo-keeper-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_path=tmp_path / "storage.json",
        storage_key="todoStorage",
        save_delay_seconds=0.02,
        toast_dismiss_seconds=0.05,
        max_tasks=20,
        max_task_length=50,
        row_height=40.0,
    )


@pytest.fixture()
def shared_storage() -> SharedStorage:
    """Memory-only storage; each test gets a fresh "origin"."""
    return SharedStorage()


@pytest.fixture()
def state(settings: SimpleNamespace, shared_storage: SharedStorage) -> Iterator[AppState]:
    app_state = create_initial_state(settings=settings, shared_storage=shared_storage)
    yield app_state
    app_state.close()


@pytest.fixture()
def three_tasks() -> TodoList:
    return (
        Task(id="1", text="Task 1", order=1),
        Task(id="2", text="Task 2", order=2),
        Task(id="3", text="Task 3", order=3),
    )
