"""Run an inspection end to end and decide whether it passed.

Functions:
    analyze(prepare, run, gather, report)                          -> bool
    run_analysis(intellij, project, profile, settings, ...)        -> bool

The verdict is True when no report produced a qualifying finding. The inspect
script's exit code is not consulted: violations are judged from report
contents only.
"""

from pathlib import Path
from typing import Callable, Iterable

import click

from intellij_inspect.config import InspectionSettings
from intellij_inspect.platforms import configure_scope
from intellij_inspect.reports.locator import iter_report_files
from intellij_inspect.reports.summary import summarize_file
from intellij_inspect.runner import Process, SubprocessProcess, run_inspect


def analyze(
    prepare: Callable[[], object],
    run: Callable[[], int],
    gather: Callable[[], Iterable[Path]],
    report: Callable[[Path], str | None],
    echo: Callable[[str], object] = click.echo,
) -> bool:
    """Prepare, run, gather and summarize, in that order.

    Every non-blank summary is echoed and makes the verdict False. A summary
    of None (unreadable report) or a blank one leaves the verdict untouched.
    """
    prepare()
    run()

    no_violations = True
    for path in gather():
        summary = report(path)
        if summary is not None and summary.strip():
            no_violations = False
            echo(summary)

    return no_violations


def run_analysis(
    intellij: str,
    project: str,
    profile: str,
    settings: InspectionSettings = InspectionSettings(),
    *,
    process: Process | None = None,
    os_name: str | None = None,
    verbose: bool = False,
) -> bool:
    """Inspect *project* with *profile* using the IntelliJ install at *intellij*."""
    if process is None:
        process = SubprocessProcess(timeout=settings.timeout)

    def prepare() -> None:
        if settings.scope is not None:
            path = configure_scope(intellij, settings.scope, os_name)
            if verbose:
                click.echo(f"[verbose] Scope '{settings.scope}' written to {path}", err=True)

    def run() -> int:
        if verbose:
            click.echo(f"[verbose] Inspecting {project} with profile {profile}", err=True)
        code = run_inspect(
            intellij, project, profile, settings.output, settings.directory,
            process=process, os_name=os_name,
        )
        if verbose:
            click.echo(f"[verbose] Inspect script exited with code {code}", err=True)
        return code

    def gather() -> Iterable[Path]:
        return iter_report_files(settings.output)

    def report(path: Path) -> str | None:
        if verbose:
            click.echo(f"[verbose] Reading {path}", err=True)
        return summarize_file(path, settings.levels)

    return analyze(prepare, run, gather, report)
