# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todo_cli.cli import main as cli_main
from todo_cli.cli.main import build_parser


def test_list_on_empty_collection(run_cli, taskfile: Path) -> None:
    code, out, err = run_cli("list")

    assert code == 0
    assert out == "No tasks to display.\n"
    assert not taskfile.exists()


def test_full_scenario(run_cli, taskfile: Path) -> None:
    assert run_cli("add", "buy milk")[0] == 0
    assert json.loads(taskfile.read_text("utf-8")) == {
        "curr_id": 2,
        "tasks": {"1": {"description": "buy milk", "finished": False}},
    }

    assert run_cli("add", "walk dog")[0] == 0
    data = json.loads(taskfile.read_text("utf-8"))
    assert data["curr_id"] == 3
    assert data["tasks"]["2"] == {"description": "walk dog", "finished": False}

    assert run_cli("done", "1")[0] == 0
    data = json.loads(taskfile.read_text("utf-8"))
    assert data["tasks"]["1"]["finished"] is True
    assert data["tasks"]["2"]["finished"] is False

    code, out, _ = run_cli("list")
    assert code == 0
    assert out == "Task 1: buy milk (Complete)\nTask 2: walk dog (Incomplete)\n"


@pytest.mark.parametrize("flag", ["--incomplete-only", "-i"])
def test_list_incomplete_only(run_cli, flag: str) -> None:
    run_cli("add", "first")
    run_cli("add", "second")
    run_cli("done", "1")

    code, out, _ = run_cli("list", flag)
    assert code == 0
    assert out == "Task 2: second (Incomplete)\n"


def test_add_prints_nothing(run_cli) -> None:
    code, out, _ = run_cli("add", "")
    assert code == 0
    assert out == ""

    assert run_cli("list")[1] == "Task 1:  (Incomplete)\n"


def test_done_unknown_id_exits_nonzero_and_keeps_file(run_cli, taskfile: Path) -> None:
    run_cli("add", "only")
    before = taskfile.read_bytes()

    code, out, err = run_cli("done", "42")

    assert code == 1
    assert out == ""
    assert "Task with ID 42 not found" in err
    assert taskfile.read_bytes() == before


def test_done_unknown_id_without_file_creates_nothing(run_cli, taskfile: Path) -> None:
    code, _, err = run_cli("done", "1")

    assert code == 1
    assert "Task with ID 1 not found" in err
    assert not taskfile.exists()


def test_corrupt_taskfile_aborts_every_command(run_cli, taskfile: Path) -> None:
    taskfile.write_text("{ not json", "utf-8")

    for argv in (["list"], ["add", "x"], ["done", "1"]):
        code, out, err = run_cli(*argv)
        assert code == 1
        assert out == ""
        assert err.startswith("Error: Could not parse")

    assert taskfile.read_text("utf-8") == "{ not json"


def test_file_option_overrides_settings(run_cli, tmp_path: Path, taskfile: Path) -> None:
    other = tmp_path / "other.json"

    assert run_cli("--file", str(other), "add", "elsewhere")[0] == 0

    assert other.exists()
    assert not taskfile.exists()


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["add"],
        ["done"],
        ["done", "abc"],
        ["done", "0"],
        ["done", "-3"],
        ["remove", "1"],
    ],
)
def test_usage_errors_exit_2(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(argv)

    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("todo ")


def test_unreadable_taskfile_exits_1(run_cli, taskfile: Path) -> None:
    taskfile.mkdir()

    code, out, err = run_cli("list")

    assert code == 1
    assert out == ""
    assert err.startswith("Error: Could not read")


def test_failed_save_exits_1(run_cli, tmp_path: Path) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", "utf-8")

    code, out, err = run_cli("--file", str(blocker / "taskfile.json"), "add", "x")

    assert code == 1
    assert out == ""
    assert err.startswith("Error: Could not write")


def test_unexpected_error_is_logged_and_reraised(
    run_cli, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def boom(*args, **kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(cli_main.registry, "dispatch", boom)

    with pytest.raises(RuntimeError, match="kaboom"):
        cli_main.main(["list"])

    err = capsys.readouterr().err
    assert "Unexpected failure running list" in err
    assert "kaboom" in err
