# core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/notification/geometry swappable and makes testing easier.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Protocol

from .actions import TodoAction
from .models import TodoList

NotifyKind = Literal["error", "warning"]

Dispatch = Callable[[TodoAction], None]
StateGetter = Callable[[], TodoList]


@dataclass(frozen=True, slots=True)
class StorageEvent:
    """A write to shared storage made by some other view."""

    key: str
    new_value: str | None


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """On-screen box of a rendered item (only the vertical extent matters)."""

    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def middle(self) -> float:
        return self.top + self.height / 2


StorageListener = Callable[[StorageEvent], None]
Unsubscribe = Callable[[], None]


class Notifier(Protocol):
    """Fire-and-forget user-visible message (toast, console line, ...)."""

    def notify(self, kind: NotifyKind, message: str) -> None: ...


class KeyValueStorage(Protocol):
    """
    One view's handle on durable storage.

    set_item may raise StorageWriteError (quota, disk, permissions).
    subscribe() delivers writes made through *other* handles only.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def subscribe(self, listener: StorageListener) -> Unsubscribe: ...


class GeometryProvider(Protocol):
    """Resolves the current box of a rendered task (None when not on screen)."""

    def box_for(self, task_id: str) -> BoundingBox | None: ...


class DragFlag(Protocol):
    """Shared "drag in progress" switch; persistence is suspended while it is set."""

    @property
    def is_dragging(self) -> bool: ...

    def set_dragging(self, value: bool) -> None: ...
