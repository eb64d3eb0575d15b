"""CLI entry point: the ``intellij-inspect`` command, using Click.

    intellij-inspect INTELLIJ PROJECT PROFILE [-d DIR] [-l LEVELS] [-o OUTPUT] [-s SCOPE]

Exits 0 when no finding of the selected severities was reported, 1 otherwise.
"""

import functools
import subprocess
import sys
from pathlib import Path

import click

from intellij_inspect import __version__
from intellij_inspect.platforms import inspect_script


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------

def is_valid_intellij(intellij: str, os_name: str | None = None) -> bool:
    """True if *intellij* holds the inspect script for this OS."""
    script = inspect_script(os_name)
    return script is not None and (Path(intellij) / script).is_file()


def is_valid_project(project: str) -> bool:
    """Project directory, pom.xml, build.gradle, ... must exist."""
    return Path(project).is_dir() or Path(project).is_file()


def is_valid_profile(profile: str) -> bool:
    path = Path(profile)
    return path.is_file() and path.suffix == ".xml"


def is_valid_subdir(subdir: str) -> bool:
    return Path(subdir).is_dir()


def _check(predicate, message: str):
    """Build a click callback that rejects values failing *predicate*."""
    def callback(ctx: click.Context, param: click.Parameter, value):
        if value is not None and not predicate(value):
            raise click.BadParameter(message.format(value=value))
        return value
    return callback


def _split_levels(ctx: click.Context, param: click.Parameter, value: str | None):
    from intellij_inspect.config import split_levels

    return None if value is None else split_levels(value)


def _write_config(ctx: click.Context, param: click.Parameter, value: str | None) -> None:
    from intellij_inspect.config import ConfigError, generate_template

    if value is None or ctx.resilient_parsing:
        return
    try:
        generate_template(value)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
    click.echo(f"Template written to '{value}'.")
    ctx.exit(0)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

def _handle_errors(func):
    """Decorator that turns configuration, platform and timeout errors into a clean exit."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from intellij_inspect.config import ConfigError
        from intellij_inspect.platforms import UnsupportedPlatformError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except UnsupportedPlatformError as exc:
            click.echo(f"Platform error: {exc}", err=True)
            sys.exit(1)
        except subprocess.TimeoutExpired as exc:
            click.echo(f"Timeout error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command(
    name="intellij-inspect",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument(
    "intellij",
    callback=_check(
        is_valid_intellij,
        'Cannot find IntelliJ inspect script in "{value}". Is it a valid IntelliJ installation?',
    ),
)
@click.argument(
    "project",
    callback=_check(is_valid_project, 'Is "{value}" a valid directory or file?'),
)
@click.argument(
    "profile",
    callback=_check(is_valid_profile, 'Is "{value}" a valid XML file?'),
)
@click.option("-d", "--directory", default=None,
              callback=_check(is_valid_subdir, 'Is "{value}" a valid directory?'),
              help="Absolute path to directory within project to be inspected.")
@click.option("-l", "--levels", default=None, callback=_split_levels,
              help="Inspection severity levels to analyze, comma-separated (default: ERROR,WARNING).")
@click.option("-o", "--output", default=None,
              help="Path to output inspection analysis results (default: inspection-results).")
@click.option("-s", "--scope", default=None,
              help="Name of IntelliJ scope to use.")
@click.option("--config", "config_path", default=None,
              help="YAML file with default levels, output, scope and timeout.")
@click.option("--write-config", default=None, is_eager=True, expose_value=False,
              callback=_write_config,
              help="Write a template config file to the given path and exit.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="intellij-inspect")
@_handle_errors
def cli(intellij: str, project: str, profile: str, directory: str | None,
        levels: frozenset[str] | None, output: str | None, scope: str | None,
        config_path: str | None, verbose: bool) -> None:
    """Run IntelliJ inspections on PROJECT using PROFILE.

    INTELLIJ is the IntelliJ installation directory. PROJECT is a project
    directory, pom.xml, build.gradle, etc. PROFILE is an inspection profile XML.
    """
    from intellij_inspect.analyzer import run_analysis
    from intellij_inspect.config import load

    settings = load(config_path).merge(
        levels=levels, output=output, scope=scope, directory=directory,
    )

    if verbose:
        click.echo(f"[verbose] Severities: {','.join(sorted(settings.levels))}", err=True)
        click.echo(f"[verbose] Output directory: {settings.output}", err=True)

    if not run_analysis(intellij, project, profile, settings, verbose=verbose):
        sys.exit(1)


def main() -> None:
    cli()
