"""Platform-specific paths inside an IntelliJ installation.

Usage:
    script = inspect_script()                  # "bin/inspect.sh" on Linux, None if unknown OS
    props  = properties_file()                 # raises UnsupportedPlatformError if unknown OS
    configure_scope("/opt/idea", "Main")       # writes idea.analyze.scope=Main

See https://www.jetbrains.com/help/idea/command-line-code-inspector.html
"""

import platform
from enum import Enum
from pathlib import Path

SCOPE_PROPERTY = "idea.analyze.scope"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class UnsupportedPlatformError(Exception):
    """Raised when a platform-specific path is required but the OS is not recognized."""


# ---------------------------------------------------------------------------
# Platform classification
# ---------------------------------------------------------------------------

class Platform(Enum):
    LINUX = "linux"
    MAC = "mac"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


_INSPECT_SCRIPTS = {
    Platform.LINUX:   "bin/inspect.sh",
    Platform.MAC:     "Contents/bin/inspect.sh",
    Platform.WINDOWS: "bin\\inspect.bat",
}

_PROPERTIES_FILES = {
    Platform.LINUX:   "bin/idea.properties",
    Platform.MAC:     "Contents/bin/idea.properties",
    Platform.WINDOWS: "bin\\idea.properties",
}


def current_os_name() -> str:
    """Return the host OS name the way the JVM reports it ("Linux", "Mac OS X", "Windows 10")."""
    name = platform.system()
    # platform.system() says "Darwin" where the JVM says "Mac OS X"
    if name == "Darwin":
        return "Mac OS X"
    return name


def classify(os_name: str | None = None) -> Platform:
    """Map an OS name to a Platform by case-insensitive substring match.

    Checked in order: "nux", "mac", "win". Anything else is UNKNOWN.
    """
    os_name = (current_os_name() if os_name is None else os_name).lower()
    if "nux" in os_name:
        return Platform.LINUX
    if "mac" in os_name:
        return Platform.MAC
    if "win" in os_name:
        return Platform.WINDOWS
    return Platform.UNKNOWN


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------

def inspect_script(os_name: str | None = None) -> str | None:
    """Return the inspect script path relative to the IntelliJ root, or None on an unknown OS."""
    return _INSPECT_SCRIPTS.get(classify(os_name))


def require_inspect_script(os_name: str | None = None) -> str:
    """Like inspect_script(), but an unknown OS is fatal.

    Raises:
        UnsupportedPlatformError: the OS is not recognized.
    """
    script = inspect_script(os_name)
    if script is None:
        raise UnsupportedPlatformError(f"Invalid operating system: {_display_name(os_name)}")
    return script


def properties_file(os_name: str | None = None) -> str:
    """Return the platform properties file path relative to the IntelliJ root.

    Raises:
        UnsupportedPlatformError: the OS is not recognized.
    """
    try:
        return _PROPERTIES_FILES[classify(os_name)]
    except KeyError:
        raise UnsupportedPlatformError(
            f"Invalid operating system: {_display_name(os_name)}"
        ) from None


def _display_name(os_name: str | None) -> str:
    return (current_os_name() if os_name is None else os_name).lower()


# ---------------------------------------------------------------------------
# Scope configuration
# ---------------------------------------------------------------------------

def configure_scope(intellij: str, scope: str, os_name: str | None = None) -> Path:
    """Restrict the next inspection run to the named IntelliJ scope.

    Writes ``idea.analyze.scope=<scope>`` to the platform properties file under
    *intellij*, replacing any existing content, and returns the file path.
    See https://www.jetbrains.com/help/idea/tuning-the-ide.html#configure-platform-properties

    Raises:
        UnsupportedPlatformError: the OS is not recognized.
    """
    path = Path(intellij) / properties_file(os_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{SCOPE_PROPERTY}={scope}", encoding="utf-8")
    return path
