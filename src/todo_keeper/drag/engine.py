# drag/engine.py

"""
Pointer-drag to reorder translation.

While an item is dragged the pointer reports a stream of "over item X at y"
events. The engine turns that stream into discrete ReorderTasks actions:

- decisions use the *ghost* centre of the dragged item (pointer minus the
  offset captured at drag start), not the raw pointer,
- a swap with the hovered item only happens once the ghost centre crosses
  75% of its height (moving down) or 25% (moving up); the band in between is
  a dead zone that stops two neighbours from flipping back and forth.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.actions import ReorderTasks
from ..core.models import find_task
from ..core.ports import BoundingBox, Dispatch, DragFlag, GeometryProvider, StateGetter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DragState:
    dragged_id: str = ""
    hovered_id: str = ""
    drag_offset: float = 0.0

    def reset(self) -> None:
        self.dragged_id = ""
        self.hovered_id = ""
        self.drag_offset = 0.0


def hysteresis_thresholds(box: BoundingBox) -> tuple[float, float]:
    """(low, high) trigger points relative to the top of the hovered box."""
    item_middle = box.height / 2
    return item_middle - item_middle / 2, item_middle + item_middle / 2


def should_reorder(
    *,
    ghost_middle: float,
    box: BoundingBox,
    dragged_order: int,
    hovered_order: int,
) -> bool:
    low, high = hysteresis_thresholds(box)
    relative = ghost_middle - box.top

    if dragged_order < hovered_order and relative > high:
        return True
    if dragged_order > hovered_order and relative < low:
        return True
    return False


class DragReorderEngine:
    """
    Drag controller for one list view.

    start() / over() / end() mirror the pointer gesture. The engine owns its
    DragState; it never edits the collection itself, it dispatches ReorderTasks.
    """

    def __init__(
        self,
        get_state: StateGetter,
        dispatch: Dispatch,
        geometry: GeometryProvider,
        drag_flag: DragFlag,
    ) -> None:
        self._get_state = get_state
        self._dispatch = dispatch
        self._geometry = geometry
        self._drag_flag = drag_flag
        self._drag = DragState()

    @property
    def dragged_id(self) -> str:
        return self._drag.dragged_id

    @property
    def drag_offset(self) -> float:
        return self._drag.drag_offset

    @property
    def is_active(self) -> bool:
        return bool(self._drag.dragged_id)

    def start(self, task_id: str, pointer_y: float, box: BoundingBox) -> bool:
        """Begin dragging task_id; completed or unknown tasks can't be dragged."""
        task = find_task(self._get_state(), task_id)
        if task is None or task.is_done:
            logger.debug("Refusing drag start for %s", task_id)
            return False

        self._drag.dragged_id = task_id
        self._drag.hovered_id = ""
        # Offset between the grab point and the element centre, fixed for the whole drag.
        self._drag.drag_offset = pointer_y - box.middle
        self._drag_flag.set_dragging(True)
        logger.debug("Drag start id=%s offset=%.1f", task_id, self._drag.drag_offset)
        return True

    def over(self, hovered_id: str, pointer_y: float) -> bool:
        """Handle one pointer move over hovered_id. Emits at most one reorder."""
        self._drag.hovered_id = hovered_id
        dragged_id = self._drag.dragged_id

        if not dragged_id or not hovered_id or dragged_id == hovered_id:
            return False

        state = self._get_state()
        dragged = find_task(state, dragged_id)
        hovered = find_task(state, hovered_id)
        if dragged is None or hovered is None:
            return False

        box = self._geometry.box_for(hovered_id)
        if box is None:
            return False

        ghost_middle = pointer_y - self._drag.drag_offset
        if not should_reorder(
            ghost_middle=ghost_middle,
            box=box,
            dragged_order=dragged.order,
            hovered_order=hovered.order,
        ):
            return False

        self._dispatch(ReorderTasks(dragged_id=dragged_id, below_id=hovered_id))
        return True

    def end(self) -> None:
        if self._drag.dragged_id:
            logger.debug("Drag end id=%s", self._drag.dragged_id)
        self._drag.reset()
        self._drag_flag.set_dragging(False)
