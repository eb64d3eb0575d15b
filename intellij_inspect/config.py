"""Inspection settings: defaults, YAML config file and environment overrides.

Usage:
    settings = InspectionSettings()                  # built-in defaults
    settings = load("inspect-config.yaml")           # raises ConfigError on bad config
    settings = settings.merge(levels={"ERROR"})      # command-line overrides
    generate_template("inspect-config.yaml")         # writes example file to disk
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

DEFAULT_LEVELS = frozenset({"ERROR", "WARNING"})
DEFAULT_OUTPUT = "inspection-results"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Settings dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InspectionSettings:
    levels: frozenset[str] = DEFAULT_LEVELS
    output: str = DEFAULT_OUTPUT
    scope: str | None = None
    directory: str | None = None
    # Seconds to wait for the inspect script; None waits indefinitely
    timeout: float | None = None

    def merge(self, **overrides) -> "InspectionSettings":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "levels" in changes:
            changes["levels"] = frozenset(changes["levels"])
        return replace(self, **changes)


def split_levels(raw: str) -> frozenset[str]:
    """Turn ``"ERROR, WARNING"`` into ``{"ERROR", "WARNING"}``."""
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str | None = None) -> InspectionSettings:
    """Load settings from a YAML file, or from defaults when *config_path* is None.

    Environment variables INSPECT_LEVELS, INSPECT_OUTPUT and INSPECT_SCOPE
    override file values and defaults.

    Raises:
        ConfigError: if the file is missing, malformed, or holds values of the
                     wrong type.
    """
    raw = {} if config_path is None else _read_yaml(config_path)
    errors: list[str] = []

    levels = os.environ.get("INSPECT_LEVELS") or raw.get("levels")
    output = os.environ.get("INSPECT_OUTPUT") or raw.get("output")
    scope  = os.environ.get("INSPECT_SCOPE")  or raw.get("scope")
    timeout = raw.get("timeout")

    if isinstance(levels, str):
        levels = split_levels(levels)
    elif isinstance(levels, list) and all(isinstance(level, str) for level in levels):
        levels = frozenset(levels)
    elif levels is not None:
        errors.append("  - 'levels' must be a list of severities or a comma-separated string")
        levels = None

    if output is not None and not isinstance(output, str):
        errors.append("  - 'output' must be a directory path")
    if scope is not None and not isinstance(scope, str):
        errors.append("  - 'scope' must be a scope name")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        errors.append("  - 'timeout' must be a positive number of seconds")

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))

    return InspectionSettings().merge(levels=levels, output=output, scope=scope, timeout=timeout)


def _read_yaml(config_path: str) -> dict:
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `intellij-inspect --write-config inspect-config.yaml` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")
    return raw


# ---------------------------------------------------------------------------
# Template generator (used by --write-config)
# ---------------------------------------------------------------------------

TEMPLATE = """\
# Severities that fail the build (exact, case-sensitive match)
levels:
  - ERROR
  - WARNING

# Directory IntelliJ writes its XML reports to
output: "inspection-results"

# Optional IntelliJ scope to restrict the inspection to
# scope: "Main"

# Optional limit, in seconds, for the inspect script
# timeout: 3600
"""


def generate_template(output_path: str = "inspect-config.yaml") -> None:
    """Write a template inspect-config.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
