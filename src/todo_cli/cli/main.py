# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Parses one subcommand, initializes logging, builds the TaskStore and runs the
command through the registry. Errors are reported on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version

from ..config import get_settings
from ..errors import TodoError
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import create_store
from .commands import CommandEmitter, CommandRegistry, registry

logger = logging.getLogger(__name__)


def _package_version() -> str:
    try:
        return version("todo-cli")
    except PackageNotFoundError:
        return "0+unknown"


def _task_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid task id: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"task id must be a positive integer, got {value}")
    return value


def build_parser(commands: CommandRegistry = registry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="A simple CLI to-do list.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument(
        "-f",
        "--file",
        dest="taskfile",
        default=None,
        help="Path to the taskfile (default: $TODO_TASKFILE or taskfile.json).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more to stderr (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    def help_for(name: str) -> str | None:
        command = commands.get(name)
        return command.help_text if command else None

    add_p = subparsers.add_parser("add", help=help_for("add"))
    add_p.add_argument("description", help="The description of the task")

    list_p = subparsers.add_parser("list", help=help_for("list"))
    list_p.add_argument(
        "-i",
        "--incomplete-only",
        action="store_true",
        help="Only show tasks that are not finished",
    )

    done_p = subparsers.add_parser("done", help=help_for("done"))
    done_p.add_argument("id", type=_task_id, help="The ID of the task")

    return parser


def _console_level(verbose: int, configured: str) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return level_from_name(configured)


def main(argv: Sequence[str] | None = None, *, emit: CommandEmitter = print) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(
        console_level=_console_level(args.verbose, settings.log_level),
        log_dir=settings.log_dir,
    )

    store = create_store(settings=settings, path_override=args.taskfile)

    try:
        registry.dispatch(store, args.command, args, emit=emit)
    except TodoError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Unexpected failure running %s", args.command)
        raise
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
