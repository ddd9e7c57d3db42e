# src/todo_cli/errors.py

"""Error family surfaced to the user by the CLI.

Every failure the tool reports is one of the three concrete classes below,
so callers and tests can branch on the type instead of the message text.
"""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for all user-facing failures."""


class ParseError(TodoError):
    """The taskfile exists but is not valid JSON or does not match the schema."""

    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"Could not parse {self.path}: {detail}")


class StoreIOError(TodoError):
    """Reading or writing the taskfile failed at the OS level."""

    def __init__(self, path: str | Path, operation: str, detail: str) -> None:
        self.path = Path(path)
        self.operation = operation
        self.detail = detail
        super().__init__(f"Could not {operation} {self.path}: {detail}")


class TaskNotFoundError(TodoError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found")
