# core/reducer.py

"""
Pure state transitions for the todo collection.

`todo_reducer(state, action)` never performs I/O and never mutates its input.
It returns a fresh tuple for every real change and the very same tuple for
no-ops, so callers can detect changes with an identity check.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

from .actions import (
    AddTask,
    DeleteTask,
    FinishTask,
    ReorderTasks,
    SyncStorage,
    TodoAction,
    ToggleTaskEditing,
)
from .models import Task, TodoList

IdFactory = Callable[[], str]


def new_task_id() -> str:
    return uuid.uuid4().hex


def calc_next_order(state: TodoList) -> int:
    """max(order) + 1 over the stored values (not len(state)), or 1 when empty."""
    if not state:
        return 1
    return max(t.order for t in state) + 1


def _index_of(state: TodoList, task_id: str) -> int:
    for idx, task in enumerate(state):
        if task.id == task_id:
            return idx
    return -1


def _replace_matching(state: TodoList, task_id: str, update: Callable[[Task], Task]) -> TodoList:
    idx = _index_of(state, task_id)
    if idx < 0:
        return state
    return state[:idx] + (update(state[idx]),) + state[idx + 1 :]


def _reorder(state: TodoList, dragged_id: str, below_id: str) -> TodoList:
    dragged_idx = _index_of(state, dragged_id)
    below_idx = _index_of(state, below_id)
    if dragged_idx < 0 or below_idx < 0:
        return state

    # The insertion point is where the item below sat before the dragged one was lifted out.
    items = list(state)
    dragged = items.pop(dragged_idx)
    items.insert(below_idx, dragged)

    return tuple(
        task if task.order == pos else task.with_changes(order=pos)
        for pos, task in enumerate(items, start=1)
    )


def todo_reducer(state: TodoList, action: TodoAction, *, id_factory: IdFactory = new_task_id) -> TodoList:
    match action:
        case AddTask(text=text):
            task = Task(
                id=id_factory(),
                text=text,
                is_done=False,
                is_editing=False,
                order=calc_next_order(state),
            )
            return state + (task,)

        case DeleteTask(task_id=task_id):
            if _index_of(state, task_id) < 0:
                return state
            return tuple(t for t in state if t.id != task_id)

        case FinishTask(task_id=task_id):
            # Completion never touches order; the view partitions done tasks instead.
            return _replace_matching(state, task_id, lambda t: t.with_changes(is_done=not t.is_done))

        case ToggleTaskEditing(task_id=task_id, input_text=input_text):
            return _replace_matching(
                state,
                task_id,
                lambda t: t.with_changes(text=input_text, is_editing=not t.is_editing),
            )

        case ReorderTasks(dragged_id=dragged_id, below_id=below_id):
            return _reorder(state, dragged_id, below_id)

        case SyncStorage(payload=payload):
            return payload

        case _:
            return state
