# src/todo_keeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens a view on shared storage and loads the stored tasks,
- wires store, notifications, persistence and drag handling into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..core.store import TodoStore
from ..drag.engine import DragReorderEngine
from ..drag.layout import RowLayout
from ..editing import EditSession
from ..notify.modal import ModalHost
from ..notify.toasts import ToastCenter
from ..persistence.controller import PersistenceController, load_initial_tasks
from ..persistence.storage import SharedStorage

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, shared_storage: SharedStorage | None = None) -> AppState:
    """
    Create AppState (one list view) from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). Pass shared_storage to open a second
    view on storage that is already in use (several views in one process).
    """
    if settings is None:
        settings = get_settings()

    if shared_storage is None:
        _ensure_local_dirs(settings)
        shared_storage = SharedStorage(settings.storage_path)

    storage = shared_storage.open_context()
    key = settings.storage_key

    store = TodoStore(load_initial_tasks(storage, key))
    toasts = ToastCenter(dismiss_seconds=settings.toast_dismiss_seconds)
    persistence = PersistenceController(
        store,
        storage,
        toasts,
        key=key,
        delay_seconds=settings.save_delay_seconds,
    )
    layout = RowLayout(store.get_state, row_height=settings.row_height)
    drag = DragReorderEngine(store.get_state, store.dispatch, layout, store)

    state = AppState(
        settings=settings,
        shared_storage=shared_storage,
        storage=storage,
        store=store,
        toasts=toasts,
        modal=ModalHost(),
        persistence=persistence,
        layout=layout,
        drag=drag,
        editor=EditSession(store, toasts, max_len=settings.max_task_length),
    )
    logger.info("View ready key=%s tasks=%d", key, len(store.state))
    return state


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown: write what is pending, then release timers and listeners."""
    if state.closed:
        return
    try:
        state.persistence.flush()
    except Exception:
        logger.exception("Final flush failed.")
    state.close()
