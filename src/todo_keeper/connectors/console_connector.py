# src/todo_keeper/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..notify.toasts import ToastList

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL for one list view.

    input() runs in a worker thread so the event loop keeps serving the debounce
    timer, toast expiry and storage events while we wait for the user.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")

    seen: set[str] = set()

    def _on_toasts(toasts: ToastList) -> None:
        for toast in toasts:
            if toast.id in seen:
                continue
            seen.add(toast.id)
            _print_ts(f"[{toast.kind.upper()}] {toast.message}")
        seen.intersection_update(t.id for t in toasts)

    unsubscribe = state.toasts.subscribe(_on_toasts)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, "> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            # Plain text is shorthand for /add.
            line = user_input if user_input.startswith("/") else f"/add {user_input}"

            try:
                response = command_registry.handle(state, line, emit=emit)
            except RuntimeError:
                raise
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is not None:
                print(response)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
