# src/todo_keeper/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.actions import DeleteTask, FinishTask
from ..core.models import Task
from ..core.state import AppState, use_todo
from ..drag.layout import simulate_drag
from ..editing import submit_new_task
from ..notify.modal import DELETE_MODAL, DELETE_MODAL_TEXT, ModalData
from ..views import ordered_for_display, render_rows

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _listing(state: AppState) -> str:
    return "\n".join(render_rows(use_todo(state).state))


def _row(state: AppState, raw: str) -> Task | None:
    """Resolve a 1-based row number as shown by /list."""
    try:
        n = int(raw)
    except ValueError:
        return None
    rows = ordered_for_display(use_todo(state).state)
    if n < 1 or n > len(rows):
        return None
    return rows[n - 1]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = use_todo(state)
    done = sum(1 for t in store.state if t.is_done)
    path = state.shared_storage.path
    return (
        "Status:\n"
        f"  Tasks: {len(store.state)} ({done} done)\n"
        f"  Storage key: {state.persistence.key}\n"
        f"  Storage file: {path if path is not None else '(memory only)'}\n"
        f"  Pending write: {'yes' if state.persistence.has_pending_write else 'no'}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return _listing(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    settings = state.settings
    added = submit_new_task(
        use_todo(state),
        " ".join(args),
        state.toasts,
        max_tasks=int(getattr(settings, "max_tasks", 20)),
        max_len=int(getattr(settings, "max_task_length", 50)),
    )
    if not added:
        return "Task not added."
    return _listing(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done <n>  -> toggle completion of row n
    """
    if not args:
        return "Usage: /done <n>"
    task = _row(state, args[0])
    if task is None:
        return f"No task #{args[0]}. Use /list."
    use_todo(state).dispatch(FinishTask(task_id=task.id))
    return _listing(state)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <n> <text>  -> replace the text of row n (blank keeps the old text)
    """
    if not args:
        return "Usage: /edit <n> <text>"
    task = _row(state, args[0])
    if task is None:
        return f"No task #{args[0]}. Use /list."
    if not state.editor.begin(task.id):
        return "Task not edited."
    state.editor.commit(task.id, " ".join(args[1:]))
    return _listing(state)


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /del <n>  -> ask for confirmation, then /yes or /no
    """
    if not args:
        return "Usage: /del <n>"
    task = _row(state, args[0])
    if task is None:
        return f"No task #{args[0]}. Use /list."

    store = use_todo(state)
    task_id = task.id

    def _confirm() -> None:
        store.dispatch(DeleteTask(task_id=task_id))

    state.modal.show(ModalData(kind=DELETE_MODAL, text=DELETE_MODAL_TEXT, on_confirm=_confirm))
    return f'{DELETE_MODAL_TEXT} "{task.text}" (/yes or /no)'


def cmd_yes(state: AppState, args: list[str]) -> str:
    if not state.modal.confirm():
        return "Nothing to confirm."
    return _listing(state)


def cmd_no(state: AppState, args: list[str]) -> str:
    if not state.modal.cancel():
        return "Nothing to cancel."
    return "Cancelled."


def cmd_move(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /move <n> <m>  -> drag row n onto row m
    """
    if len(args) < 2:
        return "Usage: /move <n> <m>"
    task = _row(state, args[0])
    if task is None:
        return f"No task #{args[0]}. Use /list."
    if task.is_done:
        return "Completed tasks can not be moved."
    try:
        target = int(args[1])
    except ValueError:
        return "Usage: /move <n> <m>"

    if emit:
        emit(f"[DRAG] Moving '{task.text}'...")
    swaps = simulate_drag(state.drag, state.layout, task.id, target - 1)
    logger.debug("/move %s -> %s: %d swap(s)", args[0], args[1], swaps)
    return _listing(state)


def cmd_reload(state: AppState, args: list[str]) -> str:
    changed = state.shared_storage.reload()
    if not changed:
        return "Storage unchanged."
    return f"Storage changed on disk: {', '.join(changed)}. Syncing..."


def cmd_toasts(state: AppState, args: list[str]) -> str:
    toasts = state.toasts.toasts
    if not toasts:
        return "No active notifications."
    return "\n".join(f"[{t.kind.upper()}] {t.message}" for t in toasts)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and storage details.")
registry.register("list", cmd_list, help_text="List tasks (open first, then done).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", aliases=["a"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.")
registry.register("edit", cmd_edit, help_text="Change task text: /edit <n> <text>.")
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del <n>.", aliases=["rm"])
registry.register("yes", cmd_yes, help_text="Confirm the pending question.", aliases=["y"])
registry.register("no", cmd_no, help_text="Dismiss the pending question.", aliases=["n"])
registry.register("move", cmd_move, help_text="Drag a task to another row: /move <n> <m>.", aliases=["mv"])
registry.register("reload", cmd_reload, help_text="Pick up changes other processes wrote to storage.")
registry.register("toasts", cmd_toasts, help_text="Show active notifications.")
