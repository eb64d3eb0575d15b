"""Tests for intellij_inspect/runner.py"""

import stat
import subprocess
import sys
from pathlib import Path

import pytest

from intellij_inspect.platforms import UnsupportedPlatformError
from intellij_inspect.runner import SubprocessProcess, build_command, run_inspect

LINUX = "Linux"

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class RecordingProcess:
    """Process double that records argv instead of launching anything."""

    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[list[str]] = []

    def spawn(self, argv):
        self.calls.append(list(argv))
        return self.exit_code


@pytest.fixture
def dirs(tmp_path):
    paths = {name: tmp_path / name for name in ("intellij", "project", "profile", "output")}
    for path in paths.values():
        path.mkdir()
    return {name: str(path) for name, path in paths.items()}


def _write_script(intellij: str, body: str) -> Path:
    script = Path(intellij) / "bin" / "inspect.sh"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text("#!/bin/sh\n" + body + "\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return script


# ---------------------------------------------------------------------------
# build_command()
# ---------------------------------------------------------------------------

def test_build_command_without_directory(dirs):
    command = build_command(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                            os_name=LINUX)
    assert command == [
        str(Path(dirs["intellij"]) / "bin/inspect.sh"),
        dirs["project"], dirs["profile"], dirs["output"],
        "-v2",
    ]


def test_build_command_appends_directory(dirs):
    command = build_command(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                            "/project/src", os_name=LINUX)
    assert command[-3:] == ["-v2", "-d", "/project/src"]


def test_build_command_makes_paths_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    command = build_command("idea", "proj", "profile.xml", "out", os_name=LINUX)
    assert command[:4] == [
        str(tmp_path / "idea" / "bin/inspect.sh"),
        str(tmp_path / "proj"),
        str(tmp_path / "profile.xml"),
        str(tmp_path / "out"),
    ]


def test_build_command_fails_for_unknown_os(dirs):
    with pytest.raises(UnsupportedPlatformError):
        build_command(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                      os_name="unknown")


# ---------------------------------------------------------------------------
# run_inspect() — with a recording process
# ---------------------------------------------------------------------------

def test_run_inspect_returns_exit_code_unchanged(dirs):
    process = RecordingProcess(exit_code=123)
    code = run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                       process=process, os_name=LINUX)
    assert code == 123
    assert len(process.calls) == 1


def test_run_inspect_creates_output_dir(tmp_path):
    output = tmp_path / "nested" / "results"
    run_inspect(str(tmp_path), str(tmp_path), str(tmp_path), str(output),
                process=RecordingProcess(), os_name=LINUX)
    assert output.is_dir()


def test_run_inspect_unknown_os_spawns_nothing(dirs):
    process = RecordingProcess()
    with pytest.raises(UnsupportedPlatformError):
        run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                    process=process, os_name="unknown")
    assert process.calls == []


# ---------------------------------------------------------------------------
# run_inspect() — with a real script
# ---------------------------------------------------------------------------

@posix_only
def test_run_inspect_script_exit_code(dirs):
    _write_script(dirs["intellij"], "exit 123")
    code = run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                       os_name=LINUX)
    assert code == 123


@posix_only
def test_run_inspect_script_receives_arguments(dirs, tmp_path):
    record = tmp_path / "process.out"
    script = _write_script(dirs["intellij"], f'echo "$0 $@" > {record}')

    code = run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                       os_name=LINUX)

    assert code == 0
    assert record.read_text().strip() == (
        f"{script} {dirs['project']} {dirs['profile']} {dirs['output']} -v2"
    )


@posix_only
def test_run_inspect_script_receives_directory(dirs, tmp_path):
    record = tmp_path / "process.out"
    script = _write_script(dirs["intellij"], f'echo "$0 $@" > {record}')
    directory = tmp_path / "directory"
    directory.mkdir()

    run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"], str(directory),
                os_name=LINUX)

    assert record.read_text().strip() == (
        f"{script} {dirs['project']} {dirs['profile']} {dirs['output']} -v2 -d {directory}"
    )


@posix_only
def test_subprocess_process_redirects_output(dirs, tmp_path):
    _write_script(dirs["intellij"], "echo progress")
    log = tmp_path / "inspect.log"
    with log.open("w") as stream:
        code = run_inspect(dirs["intellij"], dirs["project"], dirs["profile"], dirs["output"],
                           process=SubprocessProcess(stdout=stream), os_name=LINUX)
    assert code == 0
    assert log.read_text() == "progress\n"


@posix_only
def test_subprocess_process_timeout(tmp_path):
    process = SubprocessProcess(timeout=0.2)
    with pytest.raises(subprocess.TimeoutExpired):
        process.spawn(["sleep", "5"])
