# editing.py

"""
Input boundary for task text.

Everything that can be wrong with user input is caught here, reported through
the Notifier and kept away from the reducer:
- text longer than the limit is truncated (with a warning),
- blank text is refused for new tasks and reverted for edits,
- adding beyond the collection limit is refused.
"""

from __future__ import annotations

import logging

from .core.actions import AddTask, ToggleTaskEditing
from .core.models import find_task
from .core.ports import Notifier
from .core.store import TodoStore

logger = logging.getLogger(__name__)

MAX_TASKS = 20
MAX_TASK_LENGTH = 50


def clamp_input(text: str, notifier: Notifier, max_len: int = MAX_TASK_LENGTH) -> str:
    if len(text) <= max_len:
        return text
    notifier.notify("warning", f"Task length can not exceed {max_len} characters!")
    return text[:max_len]


def submit_new_task(
    store: TodoStore,
    text: str,
    notifier: Notifier,
    *,
    max_tasks: int = MAX_TASKS,
    max_len: int = MAX_TASK_LENGTH,
) -> bool:
    """Validate and dispatch AddTask. Returns True when a task was added."""
    text = text.strip()
    if not text:
        notifier.notify("warning", "You can not add an empty task!")
        return False

    if len(store.state) >= max_tasks:
        notifier.notify("error", f"You can not have more than {max_tasks}!")
        return False

    store.dispatch(AddTask(text=clamp_input(text, notifier, max_len)))
    return True


class EditSession:
    """
    Edit-mode controller for existing tasks.

    begin() flips a task into edit mode, commit() writes the draft back and leaves
    edit mode. A blank draft falls back to the text the task had when editing began.
    """

    def __init__(self, store: TodoStore, notifier: Notifier, *, max_len: int = MAX_TASK_LENGTH) -> None:
        self._store = store
        self._notifier = notifier
        self._max_len = max_len
        self._originals: dict[str, str] = {}

    def is_editing(self, task_id: str) -> bool:
        task = find_task(self._store.state, task_id)
        return task is not None and task.is_editing

    def begin(self, task_id: str) -> bool:
        task = find_task(self._store.state, task_id)
        if task is None:
            self._notifier.notify("warning", "That task no longer exists!")
            return False
        if task.is_done:
            self._notifier.notify("warning", "You can not edit a completed task!")
            return False
        if task.is_editing:
            return True

        self._originals[task_id] = task.text
        self._store.dispatch(ToggleTaskEditing(task_id=task_id, input_text=task.text))
        return True

    def commit(self, task_id: str, draft: str) -> bool:
        task = find_task(self._store.state, task_id)
        if task is None:
            self._originals.pop(task_id, None)
            self._notifier.notify("warning", "That task no longer exists!")
            return False
        if not task.is_editing:
            self._originals.pop(task_id, None)
            logger.debug("commit() for task %s that is not being edited", task_id)
            return False

        original = self._originals.pop(task_id, task.text)
        text = clamp_input(draft.strip(), self._notifier, self._max_len)
        if not text:
            text = original

        self._store.dispatch(ToggleTaskEditing(task_id=task_id, input_text=text))
        return True
