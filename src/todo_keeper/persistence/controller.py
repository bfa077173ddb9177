# persistence/controller.py

from __future__ import annotations

"""
Persistence / cross-view sync controller.

Keeps one TodoStore durable and in step with other views of the same key:
- every state change (re)starts a trailing-edge debounce timer; when it fires the
  full collection is written, unless a drag is in progress (then the write is
  skipped and not rescheduled),
- writes made by other views arrive as StorageEvents; valid payloads replace the
  local state via SyncStorage, invalid ones are reported and ignored.

Timers are event-loop handles: cancelled on every superseding change and on close().
"""

import asyncio
import logging

from ..core.actions import SyncStorage
from ..core.models import TodoList
from ..core.ports import KeyValueStorage, Notifier, StorageEvent, Unsubscribe
from ..core.store import TodoStore
from .codec import TaskPayloadError, decode_tasks, encode_tasks
from .storage import StorageWriteError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todoStorage"
DEFAULT_SAVE_DELAY_SECONDS = 0.5


def load_initial_tasks(storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> TodoList:
    """
    Read the stored collection once at startup.

    Anything unreadable (bad JSON, wrong shape, wrong field types) yields an empty
    collection; a malformed record is never partially adopted.
    """
    raw = storage.get_item(key)
    try:
        tasks = decode_tasks(raw)
    except TaskPayloadError as e:
        logger.warning("Ignoring stored tasks under %r: %s", key, e)
        return ()
    logger.info("Loaded %d task(s) from %r", len(tasks), key)
    return tasks


class PersistenceController:
    def __init__(
        self,
        store: TodoStore,
        storage: KeyValueStorage,
        notifier: Notifier,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        delay_seconds: float = DEFAULT_SAVE_DELAY_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._store = store
        self._storage = storage
        self._notifier = notifier
        self._key = key
        self._delay = max(0.0, float(delay_seconds))
        self._loop = loop

        self._timer: asyncio.TimerHandle | None = None
        self._closed = False
        self._writes = 0

        self._unsubscribers: list[Unsubscribe] = [
            store.subscribe(self._on_state_change),
            store.subscribe_dragging(self._on_drag_change),
            storage.subscribe(self._on_storage_event),
        ]

    # ---- lifecycle ----

    def __enter__(self) -> PersistenceController:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def key(self) -> str:
        return self._key

    @property
    def has_pending_write(self) -> bool:
        return self._timer is not None

    @property
    def write_count(self) -> int:
        return self._writes

    def close(self) -> None:
        """Cancel the pending write and stop listening to the store and to storage."""
        if self._closed:
            return
        self._cancel_timer()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._closed = True
        logger.debug("PersistenceController closed key=%s", self._key)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("PersistenceController is closed")

    # ---- debounced write ----

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def schedule_write(self) -> None:
        """
        Restart the quiet-period countdown.

        Without a running event loop there is nothing to drive a timer, so the
        change is written through at once (still skipped while dragging).
        """
        self._ensure_open()
        self._cancel_timer()
        try:
            loop = self._get_loop()
        except RuntimeError:
            logger.debug("No running loop; writing key=%s without debounce", self._key)
            self._on_timer()
            return
        self._timer = loop.call_later(self._delay, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        if self._closed:
            return
        if self._store.is_dragging:
            logger.debug("Drag in progress; skipping write key=%s", self._key)
            return
        self._write()

    def flush(self) -> bool:
        """Write now (if no drag is active). Returns True when a write happened."""
        self._ensure_open()
        self._cancel_timer()
        if self._store.is_dragging:
            return False
        return self._write()

    def _write(self) -> bool:
        tasks = self._store.state
        try:
            self._storage.set_item(self._key, encode_tasks(tasks))
        except StorageWriteError as e:
            logger.exception("Failed to persist %d task(s) key=%s", len(tasks), self._key)
            self._notifier.notify("error", f"Could not save your tasks: {e}")
            return False
        self._writes += 1
        logger.debug("Persisted %d task(s) key=%s", len(tasks), self._key)
        return True

    # ---- listeners ----

    def _on_state_change(self, new_state: TodoList, prev_state: TodoList) -> None:
        self.schedule_write()

    def _on_drag_change(self, dragging: bool) -> None:
        # Drag end counts as a change: anything reordered mid-drag gets written now.
        if not dragging:
            self.schedule_write()

    def _on_storage_event(self, event: StorageEvent) -> None:
        if self._closed or event.key != self._key:
            return

        try:
            tasks = decode_tasks(event.new_value)
        except TaskPayloadError as e:
            logger.warning("Rejected external change key=%s: %s", event.key, e)
            self._notifier.notify("error", f"Failed to sync tasks from another window: {e}")
            return

        logger.info("External change key=%s: syncing %d task(s)", event.key, len(tasks))
        self._store.dispatch(SyncStorage(payload=tasks))
