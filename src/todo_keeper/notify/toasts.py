# notify/toasts.py

from __future__ import annotations

"""
Transient user notifications ("toasts").

ToastCenter implements the Notifier port. State changes go through a small pure
reducer, the same way the todo collection does; auto-dismiss timers live on the
event loop and are cancelled on explicit dismissal and on close().
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import NotifyKind, Unsubscribe

logger = logging.getLogger(__name__)

DEFAULT_DISMISS_SECONDS = 3.0


class ToastKind(StrEnum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Toast:
    id: str
    kind: ToastKind
    message: str


ToastList = tuple[Toast, ...]


@dataclass(frozen=True, slots=True)
class ShowToast:
    toast: Toast


@dataclass(frozen=True, slots=True)
class HideToast:
    toast_id: str


ToastAction = ShowToast | HideToast


def toast_reducer(state: ToastList, action: ToastAction) -> ToastList:
    match action:
        case ShowToast(toast=toast):
            if any(t.message == toast.message for t in state):
                return state
            return state + (toast,)
        case HideToast(toast_id=toast_id):
            if not any(t.id == toast_id for t in state):
                return state
            return tuple(t for t in state if t.id != toast_id)
        case _:
            return state


ToastListener = Callable[[ToastList], None]


class ToastCenter:
    def __init__(
        self,
        *,
        dismiss_seconds: float = DEFAULT_DISMISS_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._dismiss_seconds = max(0.0, float(dismiss_seconds))
        self._loop = loop
        self._state: ToastList = ()
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._listeners: list[ToastListener] = []

    @property
    def toasts(self) -> ToastList:
        return self._state

    def subscribe(self, listener: ToastListener) -> Unsubscribe:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _apply(self, action: ToastAction) -> bool:
        new_state = toast_reducer(self._state, action)
        if new_state is self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True

    def _schedule_dismiss(self, toast_id: str) -> None:
        try:
            loop = self._loop or asyncio.get_running_loop()
        except RuntimeError:
            # No loop (plain sync caller): the toast stays until hide()/close().
            logger.debug("No running loop; toast %s will not auto-dismiss", toast_id)
            return
        self._timers[toast_id] = loop.call_later(self._dismiss_seconds, self._expire, toast_id)

    def _expire(self, toast_id: str) -> None:
        self._timers.pop(toast_id, None)
        self._apply(HideToast(toast_id=toast_id))

    def notify(self, kind: NotifyKind, message: str) -> None:
        toast_kind = ToastKind(kind)
        if toast_kind is ToastKind.ERROR:
            logger.error("Toast: %s", message)
        else:
            logger.warning("Toast: %s", message)

        toast = Toast(id=uuid.uuid4().hex, kind=toast_kind, message=message)
        if self._apply(ShowToast(toast=toast)):
            self._schedule_dismiss(toast.id)

    def hide(self, toast_id: str) -> None:
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        self._apply(HideToast(toast_id=toast_id))

    def close(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._listeners.clear()
