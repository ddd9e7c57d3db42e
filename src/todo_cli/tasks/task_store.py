# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import ParseError, StoreIOError
from .task_models import Task, TaskCollection

logger = logging.getLogger(__name__)

DEFAULT_TASKFILE = "taskfile.json"


class TaskStore:
    """
    JSON taskfile store.

    On-disk format:
        {"curr_id": <int>, "tasks": {"<id>": {"description": str, "finished": bool}}}

    - a missing file means "empty collection"; load() never creates it
    - save() rewrites the whole file (temp file + os.replace)
    - no locking: two processes saving at once may lose one update
    """

    def __init__(self, path: str | Path = DEFAULT_TASKFILE) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- JSON <-> model ----

    def _parse_task(self, key: str, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise ParseError(self._path, f"task {key!r} is not an object")
        description = raw.get("description")
        finished = raw.get("finished")
        if not isinstance(description, str):
            raise ParseError(self._path, f"task {key!r} has no string 'description'")
        if not isinstance(finished, bool):
            raise ParseError(self._path, f"task {key!r} has no boolean 'finished'")
        return Task(description=description, finished=finished)

    def _from_json(self, data: Any) -> TaskCollection:
        if not isinstance(data, dict):
            raise ParseError(self._path, "top-level value is not an object")

        curr_id = data.get("curr_id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(curr_id, int) or isinstance(curr_id, bool) or curr_id < 1:
            raise ParseError(self._path, "'curr_id' must be a positive integer")

        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, dict):
            raise ParseError(self._path, "'tasks' must be an object")

        tasks: dict[int, Task] = {}
        for key, raw in raw_tasks.items():
            # "01" and "1" would collapse into one id; only the canonical spelling is accepted.
            if not (key.isascii() and key.isdigit()) or key != str(int(key)):
                raise ParseError(self._path, f"task key {key!r} is not a non-negative integer")
            tasks[int(key)] = self._parse_task(key, raw)

        next_id = curr_id
        if tasks and max(tasks) >= next_id:
            next_id = max(tasks) + 1
            logger.warning(
                "Taskfile %s has curr_id=%d but task ids up to %d; using next id %d",
                self._path,
                curr_id,
                max(tasks),
                next_id,
            )

        return TaskCollection(next_id=next_id, tasks=dict(sorted(tasks.items())))

    @staticmethod
    def _to_json(collection: TaskCollection) -> dict[str, Any]:
        return {
            "curr_id": collection.next_id,
            "tasks": {
                str(task_id): {"description": task.description, "finished": task.finished}
                for task_id, task in collection.iter_sorted()
            },
        }

    # ---- public API ----

    def load(self) -> TaskCollection:
        try:
            text = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.info("No taskfile at %s; starting with an empty collection", self._path)
            return TaskCollection()
        except UnicodeDecodeError as e:
            raise ParseError(self._path, f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise StoreIOError(self._path, "read", e.strerror or str(e)) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(self._path, f"{e.msg} (line {e.lineno}, column {e.colno})") from e
        except RecursionError as e:
            raise ParseError(self._path, "content is nested too deeply") from e

        collection = self._from_json(data)
        logger.debug(
            "Loaded %d tasks from %s (next_id=%d)", len(collection), self._path, collection.next_id
        )
        return collection

    def save(self, collection: TaskCollection) -> None:
        payload = json.dumps(self._to_json(collection), ensure_ascii=False, indent=2) + "\n"
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp, exc_info=True)
            raise StoreIOError(self._path, "write", e.strerror or str(e)) from e
        logger.info("Saved %d tasks to %s", len(collection), self._path)

    @staticmethod
    def allocate_id(collection: TaskCollection) -> int:
        """Hand out `collection.next_id` and advance the counter. Call once per new task."""
        task_id = collection.next_id
        collection.next_id += 1
        return task_id
