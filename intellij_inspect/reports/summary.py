"""Severity-filtered, one-line-per-finding summaries of inspection reports.

Functions:
    summarize(report, severities)       -> list[str]
    summarize_file(path, severities)    -> str | None
"""

import traceback
from pathlib import Path
from typing import Collection

import click

from intellij_inspect.models import Report
from intellij_inspect.parser import ReportParseError, parse_report


def summarize(report: Report, severities: Collection[str]) -> list[str]:
    """Return one line per problem whose severity is in *severities*.

    Membership is by exact string; document order is kept and duplicates are
    not removed.
    """
    return report.summary(severities)


def summarize_file(path: str | Path, severities: Collection[str]) -> str | None:
    """Parse the report at *path* and return its summary lines joined by newlines.

    Returns ``""`` when no problem matches *severities*. When the file cannot
    be read or parsed, a diagnostic (the error, the raw content and the
    traceback) is written to stderr and None is returned: an unusable report
    is not counted as a violation.
    """
    path = Path(path)
    content: str | None = None
    try:
        content = path.read_text(encoding="utf-8")
        report = parse_report(content)
    except (OSError, UnicodeDecodeError, ReportParseError) as exc:
        _report_error(path, content, exc)
        return None
    return "\n".join(summarize(report, severities))


def _report_error(path: Path, content: str | None, exc: Exception) -> None:
    click.echo(f"Error parsing {path.absolute()}: {exc}", err=True)
    click.echo("---", err=True)
    click.echo(content if content is not None else "<unreadable>", err=True)
    click.echo("---", err=True)
    click.echo(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip(),
        err=True,
    )
