# core/actions.py

"""
Actions accepted by the todo reducer.

Each action is a small frozen dataclass; together they form the `TodoAction`
union the reducer matches on. Components never touch the collection directly,
they build one of these and hand it to `TodoStore.dispatch`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import TodoList


@dataclass(frozen=True, slots=True)
class AddTask:
    text: str


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class FinishTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class ToggleTaskEditing:
    task_id: str
    input_text: str


@dataclass(frozen=True, slots=True)
class ReorderTasks:
    dragged_id: str
    below_id: str


@dataclass(frozen=True, slots=True)
class SyncStorage:
    payload: TodoList


TodoAction = AddTask | DeleteTask | FinishTask | ToggleTaskEditing | ReorderTasks | SyncStorage
