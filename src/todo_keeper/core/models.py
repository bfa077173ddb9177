# core/models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

TodoList = tuple["Task", ...]


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single list entry.

    Notes:
    - `order` is only guaranteed contiguous (1..n) right after a reorder;
      adds and deletes leave gaps.
    - Instances are immutable; the reducer "mutates" a task by returning a copy
      with the same id.
    """

    id: str
    text: str
    is_done: bool = False
    is_editing: bool = False
    order: int = 1

    def with_changes(self, **changes: Any) -> Task:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        # Storage keys stay camelCase so the record matches other views of the same key.
        return {
            "id": self.id,
            "text": self.text,
            "isDone": self.is_done,
            "isEditing": self.is_editing,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        return cls(
            id=raw["id"],
            text=raw["text"],
            is_done=raw["isDone"],
            is_editing=raw["isEditing"],
            order=int(raw["order"]),
        )


def find_task(tasks: TodoList, task_id: str) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None
