# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Every variable is optional; defaults are shown in parentheses.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_KEEPER_APP_NAME": "App display name (default: todo-keeper).",
    "TODO_KEEPER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TODO_KEEPER_DATA_DIR": "Local data directory, also holds todo.log (default: .local/todo_keeper).",
    "TODO_KEEPER_STORAGE_PATH": "Shared storage JSON file (default: <data_dir>/storage.json).",
    # Persistence
    "TODO_KEEPER_STORAGE_KEY": "Key the task list is stored under (default: todoStorage).",
    "TODO_KEEPER_SAVE_DELAY_SECONDS": "Quiet period before a change is written (default: 0.5).",
    # Limits
    "TODO_KEEPER_MAX_TASKS": "Maximum number of tasks in the list (default: 20).",
    "TODO_KEEPER_MAX_TASK_LENGTH": "Maximum characters per task (default: 50).",
    # Presentation
    "TODO_KEEPER_TOAST_DISMISS_SECONDS": "How long notifications stay visible (default: 3.0).",
    "TODO_KEEPER_ROW_HEIGHT": "Row height used when translating /move into drag gestures (default: 40).",
}
