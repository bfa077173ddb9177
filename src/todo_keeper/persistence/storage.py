# persistence/storage.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.ports import StorageEvent, StorageListener, Unsubscribe

logger = logging.getLogger(__name__)


class StorageWriteError(OSError):
    """A write to durable storage failed (disk full, permissions, quota...)."""


class SharedStorage:
    """
    Origin-wide key/value storage shared by every open view.

    Values are plain strings. When a file path is given the whole map is kept in
    a JSON object on disk and rewritten atomically on every change (tmp + replace),
    so the data survives restarts.

    Views never use this object directly; they get a StorageContext via open_context().
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None
        self._values: dict[str, str] = {}
        self._contexts: list[StorageContext] = []
        if self._path is not None:
            self._values = self._read_file()
            logger.info("SharedStorage ready path=%s keys=%d", self._path, len(self._values))

    @property
    def path(self) -> Path | None:
        return self._path

    def open_context(self) -> StorageContext:
        ctx = StorageContext(self)
        self._contexts.append(ctx)
        return ctx

    def _detach(self, ctx: StorageContext) -> None:
        if ctx in self._contexts:
            self._contexts.remove(ctx)

    # ---- file backing ----

    def _read_file(self) -> dict[str, str]:
        assert self._path is not None
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read storage file %s; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s is not an object; starting empty", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _write_file(self, values: dict[str, str]) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(values, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageWriteError(f"failed to write {self._path}: {e}") from e
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    # ---- cell access ----

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def put(self, key: str, value: str | None, *, origin: StorageContext | None = None) -> None:
        if self._values.get(key) == value:
            return

        updated = dict(self._values)
        if value is None:
            updated.pop(key, None)
        else:
            updated[key] = value

        # Only commit in memory once the file write went through.
        self._write_file(updated)
        self._values = updated
        self._broadcast(StorageEvent(key=key, new_value=value), origin=origin)

    def reload(self) -> list[str]:
        """
        Re-read the backing file and announce keys changed by another process.

        Returns the changed keys. No-op for memory-only storage.
        """
        if self._path is None:
            return []
        fresh = self._read_file()
        changed = sorted(k for k in set(self._values) | set(fresh) if self._values.get(k) != fresh.get(k))
        self._values = fresh
        for key in changed:
            self._broadcast(StorageEvent(key=key, new_value=fresh.get(key)), origin=None)
        if changed:
            logger.info("Storage reload: %d key(s) changed", len(changed))
        return changed

    def _broadcast(self, event: StorageEvent, *, origin: StorageContext | None) -> None:
        for ctx in list(self._contexts):
            if ctx is origin:
                continue
            ctx._deliver(event)


class StorageContext:
    """
    One view's handle on SharedStorage (the KeyValueStorage port).

    Listeners receive StorageEvents for writes made through other contexts.
    Delivery goes through the running event loop when there is one, so a listener
    never runs inside the writer's call stack.
    """

    def __init__(self, shared: SharedStorage) -> None:
        self._shared = shared
        self._listeners: list[StorageListener] = []
        self._closed = False

    def get_item(self, key: str) -> str | None:
        return self._shared.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._shared.put(key, value, origin=self)

    def remove_item(self, key: str) -> None:
        self._shared.put(key, None, origin=self)

    def subscribe(self, listener: StorageListener) -> Unsubscribe:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()
        self._shared._detach(self)

    def _deliver(self, event: StorageEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            self._fire(event)
        else:
            loop.call_soon(self._fire, event)

    def _fire(self, event: StorageEvent) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed key=%s", event.key)
