"""Launch the IntelliJ inspect script as a child process.

Usage:
    code = run_inspect("/opt/idea", "project/", "profile.xml", "inspection-results")

The child's stdout/stderr are inherited so the engine's progress stays visible.
The exit code is returned as-is; callers decide what it means.
"""

import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from intellij_inspect.platforms import require_inspect_script

# Verbosity level 2 makes the engine print a progress indicator
VERBOSITY_FLAG = "-v2"


# ---------------------------------------------------------------------------
# Process capability
# ---------------------------------------------------------------------------

class Process(Protocol):
    def spawn(self, argv: Sequence[str]) -> int:
        ...


class SubprocessProcess:
    """Run a command with subprocess and block until it exits.

    ``stdout`` / ``stderr`` default to None, meaning the child shares the
    caller's streams. ``timeout`` (seconds) is optional; when it expires
    ``subprocess.TimeoutExpired`` propagates and the child is killed.
    """

    def __init__(self, stdout=None, stderr=None, timeout: float | None = None) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._timeout = timeout

    def spawn(self, argv: Sequence[str]) -> int:
        completed = subprocess.run(
            list(argv),
            stdout=self._stdout,
            stderr=self._stderr,
            timeout=self._timeout,
            check=False,
        )
        return completed.returncode


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_command(
    intellij: str,
    project: str,
    profile: str,
    output: str,
    directory: str | None = None,
    os_name: str | None = None,
) -> list[str]:
    """Return the argv for the inspect script.

    ``<script> <project> <profile> <output> -v2 [-d <directory>]``, all paths
    made absolute. *directory* is passed through unchanged.

    Raises:
        UnsupportedPlatformError: the OS is not recognized.
    """
    script = Path(intellij) / require_inspect_script(os_name)
    command = [
        str(script.absolute()),
        str(Path(project).absolute()),
        str(Path(profile).absolute()),
        str(Path(output).absolute()),
        VERBOSITY_FLAG,
    ]
    if directory is not None:
        command.extend(["-d", directory])
    return command


def run_inspect(
    intellij: str,
    project: str,
    profile: str,
    output: str,
    directory: str | None = None,
    *,
    process: Process | None = None,
    os_name: str | None = None,
) -> int:
    """Run the inspect script and return its raw exit code.

    Creates *output* if needed before launching.
    """
    command = build_command(intellij, project, profile, output, directory, os_name)
    Path(output).mkdir(parents=True, exist_ok=True)
    return (process or SubprocessProcess()).spawn(command)
