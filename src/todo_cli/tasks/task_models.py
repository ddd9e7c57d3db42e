# src/todo_cli/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(slots=True)
class Task:
    description: str
    finished: bool = False

    @property
    def status_label(self) -> str:
        return "Complete" if self.finished else "Incomplete"


@dataclass(slots=True)
class TaskCollection:
    """
    Root of the persisted state.

    Notes:
    - tasks are keyed by id; ids are never reused, so removing a task later
      would not shift the ids of the others.
    - every key in `tasks` is strictly less than `next_id`.
    - dict order is insertion order, not id order; use `iter_sorted()` for display.
    """

    next_id: int = 1
    tasks: dict[int, Task] = field(default_factory=dict)

    def iter_sorted(self) -> Iterator[tuple[int, Task]]:
        for task_id in sorted(self.tasks):
            yield task_id, self.tasks[task_id]

    def get(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def __len__(self) -> int:
        return len(self.tasks)
