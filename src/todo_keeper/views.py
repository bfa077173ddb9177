# views.py

from __future__ import annotations

from collections.abc import Iterable

from .core.models import Task

DONE_MARK = "x"
EDIT_MARK = "*"


def ordered_for_display(tasks: Iterable[Task]) -> list[Task]:
    """Open tasks by order, then completed tasks by order. Stored order is not touched."""
    items = list(tasks)
    open_tasks = sorted((t for t in items if not t.is_done), key=lambda t: t.order)
    done_tasks = sorted((t for t in items if t.is_done), key=lambda t: t.order)
    return open_tasks + done_tasks


def render_rows(tasks: Iterable[Task]) -> list[str]:
    rows = ordered_for_display(tasks)
    if not rows:
        return ["(no tasks)"]

    lines: list[str] = []
    for n, task in enumerate(rows, start=1):
        mark = DONE_MARK if task.is_done else " "
        edit = f" {EDIT_MARK}editing" if task.is_editing else ""
        lines.append(f"{n:>2}. [{mark}] {task.text}{edit}")
    return lines
