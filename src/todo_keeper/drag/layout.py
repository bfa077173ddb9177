# drag/layout.py

from __future__ import annotations

import logging

from ..core.models import Task
from ..core.ports import BoundingBox, StateGetter
from ..views import ordered_for_display
from .engine import DragReorderEngine

logger = logging.getLogger(__name__)


class RowLayout:
    """
    Fixed-height rows in display order, recomputed from live state on every lookup.

    Stands in for the rendered list: after a reorder the boxes move with the tasks,
    exactly like a re-rendered page would.
    """

    def __init__(self, get_state: StateGetter, row_height: float = 40.0) -> None:
        if row_height <= 0:
            raise ValueError("row_height must be positive")
        self._get_state = get_state
        self.row_height = float(row_height)

    def rows(self) -> list[Task]:
        return ordered_for_display(self._get_state())

    def box_for(self, task_id: str) -> BoundingBox | None:
        for idx, task in enumerate(self.rows()):
            if task.id == task_id:
                return BoundingBox(top=idx * self.row_height, height=self.row_height)
        return None

    def row_at(self, y: float) -> Task | None:
        if y < 0:
            return None
        rows = self.rows()
        idx = int(y // self.row_height)
        return rows[idx] if idx < len(rows) else None


def simulate_drag(
    engine: DragReorderEngine,
    layout: RowLayout,
    task_id: str,
    target_index: int,
    *,
    step: float | None = None,
) -> int:
    """
    Drag task_id onto the row currently at target_index (0-based, among open tasks).

    The pointer grabs the source row at its centre and sweeps to the far edge of
    the target row; every position produces one over() on the row under the
    pointer. Completed rows get no drag events. Returns the number of reorders.
    """
    source_box = layout.box_for(task_id)
    if source_box is None:
        return 0

    open_rows = [t for t in layout.rows() if not t.is_done]
    if not open_rows:
        return 0
    target_index = max(0, min(int(target_index), len(open_rows) - 1))
    target_box = layout.box_for(open_rows[target_index].id)
    if target_box is None:
        return 0

    pointer_y = source_box.middle
    if not engine.start(task_id, pointer_y, source_box):
        return 0

    if target_box.top > source_box.top:
        end_y = target_box.bottom - 1
    elif target_box.top < source_box.top:
        end_y = target_box.top + 1
    else:
        end_y = pointer_y

    step = step or max(1.0, layout.row_height / 8)
    emitted = 0
    y = pointer_y
    try:
        while y != end_y:
            y = min(y + step, end_y) if end_y > y else max(y - step, end_y)
            hovered = layout.row_at(y)
            if hovered is None or hovered.is_done:
                continue
            if engine.over(hovered.id, y):
                emitted += 1
    finally:
        engine.end()

    logger.debug("Simulated drag id=%s -> row %d: %d reorder(s)", task_id, target_index, emitted)
    return emitted
