# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from todo_cli.cli import main as cli_main
from todo_cli.config import Settings
from todo_cli.tasks.task_store import TaskStore

RunCli = Callable[..., tuple[int, str, str]]


@pytest.fixture()
def taskfile(tmp_path: Path) -> Path:
    return tmp_path / "taskfile.json"


@pytest.fixture()
def settings(taskfile: Path) -> Settings:
    """
    Settings pointing at a per-test taskfile.

    Built directly rather than via Settings.from_env() so a developer's own
    environment or .env file cannot leak into the tests.
    """
    return Settings(taskfile_path=taskfile, log_level="WARNING", log_dir=None)


@pytest.fixture()
def store(taskfile: Path) -> TaskStore:
    return TaskStore(taskfile)


@pytest.fixture()
def run_cli(settings: Settings, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> RunCli:
    """Run the CLI in-process against the per-test taskfile; returns (exit code, stdout, stderr)."""
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    def _run(*argv: str) -> tuple[int, str, str]:
        code = cli_main.main(list(argv))
        out, err = capsys.readouterr()
        return code, out, err

    return _run


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; put pytest's handlers back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
