# src/todo_cli/cli/commands.py

from __future__ import annotations

import logging
from argparse import Namespace
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..errors import TaskNotFoundError
from ..tasks.task_models import Task, TaskCollection
from ..tasks.task_store import TaskStore

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[TaskStore, TaskCollection, Namespace, CommandEmitter], None]

EMPTY_LIST_MESSAGE = "No tasks to display."

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    mutates: bool


class CommandRegistry:
    """
    Subcommand registry (add, list, done, ...).

    One dispatch per process: load the collection, run exactly one handler,
    save only when the command mutates state.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        mutates: bool,
    ) -> None:
        self._commands[name.lower()] = Command(
            name=name.lower(), handler=handler, help_text=help_text, mutates=mutates
        )

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def dispatch(
        self,
        store: TaskStore,
        name: str,
        args: Namespace,
        emit: CommandEmitter = print,
    ) -> None:
        command = self.get(name)
        if command is None:
            raise ValueError(f"Unknown command: {name}")

        collection = store.load()
        logger.debug("Running %s (args=%s)", command.name, vars(args))
        command.handler(store, collection, args, emit)

        if command.mutates:
            store.save(collection)


def format_task_lines(collection: TaskCollection, *, incomplete_only: bool = False) -> list[str]:
    lines: list[str] = []
    for task_id, task in collection.iter_sorted():
        if incomplete_only and task.finished:
            continue
        lines.append(f"Task {task_id}: {task.description} ({task.status_label})")
    return lines or [EMPTY_LIST_MESSAGE]


def _emit_all(emit: CommandEmitter, lines: Iterable[str]) -> None:
    for line in lines:
        emit(line)


def cmd_add(
    store: TaskStore,
    collection: TaskCollection,
    args: Namespace,
    emit: CommandEmitter,
) -> None:
    # Empty descriptions are accepted as-is.
    task_id = store.allocate_id(collection)
    collection.tasks[task_id] = Task(description=args.description)
    logger.info("Added task %d", task_id)


def cmd_list(
    store: TaskStore,
    collection: TaskCollection,
    args: Namespace,
    emit: CommandEmitter,
) -> None:
    incomplete_only = bool(getattr(args, "incomplete_only", False))
    _emit_all(emit, format_task_lines(collection, incomplete_only=incomplete_only))


def cmd_done(
    store: TaskStore,
    collection: TaskCollection,
    args: Namespace,
    emit: CommandEmitter,
) -> None:
    task = collection.get(args.id)
    if task is None:
        raise TaskNotFoundError(args.id)
    if task.finished:
        logger.info("Task %d was already finished", args.id)
    task.finished = True


registry = CommandRegistry()

registry.register("add", cmd_add, help_text="Add a new task", mutates=True)
registry.register("list", cmd_list, help_text="List all tasks", mutates=False)
registry.register("done", cmd_done, help_text="Mark a task as done", mutates=True)
