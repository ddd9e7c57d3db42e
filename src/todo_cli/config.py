# src/todo_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

With nothing set, the tool uses `taskfile.json` in the working directory,
logs warnings and errors to stderr, and writes no log file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    taskfile_path: Path
    log_level: str
    log_dir: Path | None

    @staticmethod
    def from_env(*, use_dotenv: bool = True) -> "Settings":
        if use_dotenv:
            # Only the working directory's .env; parent directories are not searched.
            load_dotenv(".env", override=False)

        taskfile_path = _env_path(_k("TASKFILE")) or Path("taskfile.json")
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_dir = _env_path(_k("LOG_DIR"))

        return Settings(taskfile_path=taskfile_path, log_level=log_level, log_dir=log_dir)


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
