# src/todo_keeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a working default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO_KEEPER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_path: Path

    # ---- Persistence ----
    storage_key: str
    save_delay_seconds: float

    # ---- Input limits ----
    max_tasks: int
    max_task_length: int

    # ---- Presentation ----
    toast_dismiss_seconds: float
    row_height: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-keeper") or "todo-keeper"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_keeper"))
        storage_path = _env_path(_k("STORAGE_PATH"), data_dir / "storage.json")

        storage_key = _env(_k("STORAGE_KEY"), "todoStorage") or "todoStorage"
        save_delay_seconds = max(0.0, _env_float(_k("SAVE_DELAY_SECONDS"), 0.5))

        max_tasks = max(1, _env_int(_k("MAX_TASKS"), 20))
        max_task_length = max(1, _env_int(_k("MAX_TASK_LENGTH"), 50))

        toast_dismiss_seconds = max(0.0, _env_float(_k("TOAST_DISMISS_SECONDS"), 3.0))
        row_height = _env_float(_k("ROW_HEIGHT"), 40.0)
        if row_height <= 0:
            row_height = 40.0

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_path=storage_path,
            storage_key=storage_key,
            save_delay_seconds=save_delay_seconds,
            max_tasks=max_tasks,
            max_task_length=max_task_length,
            toast_dismiss_seconds=toast_dismiss_seconds,
            row_height=row_height,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
