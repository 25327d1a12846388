# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "ScheduleEngine"
COMPANY_NAME = "ProjectERP"
DB_FILENAME = "schedule.db"
LOG_DIRNAME = "logs"


def _platform_data_home() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def user_data_dir() -> Path:
    """
    Per-user directory holding the schedule database and logs, e.g.
    ~/.local/share/ProjectERP/ScheduleEngine on Linux.
    Falls back to ~/.ScheduleEngine when the platform location is not writable.
    """
    path = _platform_data_home() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_log_dir() -> Path:
    return user_data_dir() / LOG_DIRNAME


def default_db_path() -> Path:
    return user_data_dir() / DB_FILENAME
