# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns settings (plus any
command-line override) into the concrete TaskStore the dispatcher runs against.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import Settings, get_settings
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(
    *,
    settings: Settings | None = None,
    path_override: str | Path | None = None,
) -> TaskStore:
    """
    Create the TaskStore for this run.

    Keeping settings injectable lets tests point the store at a temporary path.
    If settings is None, falls back to get_settings().
    """
    if path_override is not None:
        path = Path(path_override).expanduser()
    else:
        if settings is None:
            settings = get_settings()
        path = Path(settings.taskfile_path)

    logger.debug("Using taskfile %s", path)
    return TaskStore(path)
