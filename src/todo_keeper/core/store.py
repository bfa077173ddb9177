# core/store.py

from __future__ import annotations

import logging
from collections.abc import Callable

from .actions import TodoAction
from .models import TodoList
from .ports import Unsubscribe
from .reducer import IdFactory, new_task_id, todo_reducer

logger = logging.getLogger(__name__)

# (new_state, previous_state)
StateListener = Callable[[TodoList, TodoList], None]
DragListener = Callable[[bool], None]


class TodoStore:
    """
    Hosts the reducer for one view.

    - dispatch() runs the reducer synchronously and notifies state listeners
      only when the returned collection is a different object.
    - is_dragging is the shared drag flag; persistence skips writes while set.

    The store is the only place the collection is replaced.
    """

    def __init__(self, initial: TodoList = (), *, id_factory: IdFactory = new_task_id) -> None:
        self._state: TodoList = tuple(initial)
        self._id_factory = id_factory
        self._is_dragging = False
        self._state_listeners: list[StateListener] = []
        self._drag_listeners: list[DragListener] = []
        self._closed = False

    @property
    def state(self) -> TodoList:
        return self._state

    def get_state(self) -> TodoList:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._is_dragging

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("TodoStore is closed")

    def dispatch(self, action: TodoAction) -> None:
        self._ensure_open()
        prev = self._state
        new_state = todo_reducer(prev, action, id_factory=self._id_factory)
        if new_state is prev:
            logger.debug("No-op action %s", type(action).__name__)
            return

        self._state = new_state
        logger.debug("Applied %s: %d tasks", type(action).__name__, len(new_state))
        for listener in list(self._state_listeners):
            listener(new_state, prev)

    def set_dragging(self, value: bool) -> None:
        self._ensure_open()
        value = bool(value)
        if value == self._is_dragging:
            return
        self._is_dragging = value
        for listener in list(self._drag_listeners):
            listener(value)

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        self._state_listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return _unsubscribe

    def subscribe_dragging(self, listener: DragListener) -> Unsubscribe:
        self._drag_listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._drag_listeners:
                self._drag_listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._state_listeners.clear()
        self._drag_listeners.clear()
        self._closed = True
