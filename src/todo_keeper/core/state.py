# core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .store import TodoStore

if TYPE_CHECKING:
    from ..drag.engine import DragReorderEngine
    from ..drag.layout import RowLayout
    from ..editing import EditSession
    from ..notify.modal import ModalHost
    from ..notify.toasts import ToastCenter
    from ..persistence.controller import PersistenceController
    from ..persistence.storage import SharedStorage, StorageContext


@dataclass
class AppState:
    """Everything one open list view needs, wired once in cli.bootstrap."""

    # Store Settings on the state for easy access in other modules later.
    settings: object

    shared_storage: SharedStorage
    storage: StorageContext
    store: TodoStore
    toasts: ToastCenter
    modal: ModalHost
    persistence: PersistenceController
    layout: RowLayout
    drag: DragReorderEngine
    editor: EditSession

    closed: bool = field(default=False)

    def close(self) -> None:
        """Tear the view down: pending write cancelled, listeners and timers released."""
        if self.closed:
            return
        self.persistence.close()
        self.toasts.close()
        self.storage.close()
        self.store.close()
        self.closed = True


def use_todo(state: AppState | None) -> TodoStore:
    """Return the view's store; calling it without an open AppState is a bug."""
    if state is None or state.closed:
        raise RuntimeError("use_todo must be used within an open AppState")
    return state.store
