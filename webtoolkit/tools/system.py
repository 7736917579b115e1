"""
System tool detection - discovers tools already installed on the host.

A system install is only an optimization: every failure here (tool missing,
version check failing, unexpected output) yields "not found" and is logged at
debug level instead of being raised.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Tuple

from ..core.exceptions import MalformedVersionOutputError
from ..core.filesystem import find_executable
from .application import Application

logger = logging.getLogger(__name__)

VERSION_CHECK_TIMEOUT = 10


def system_version(app: Application, path: Path) -> Optional[str]:
    """
    Run the version check of an installed tool and normalize its output.

    Args:
        app: Application the executable belongs to
        path: Executable to run

    Returns:
        Normalized version string, or None if the check failed
    """
    try:
        result = subprocess.run(
            [str(path), app.version_test],
            capture_output=True,
            timeout=VERSION_CHECK_TIMEOUT,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"Timeout running `{path} {app.version_test}`")
        return None
    except OSError as e:
        logger.debug(f"Failed running `{path} {app.version_test}`: {e}")
        return None

    if result.returncode != 0:
        logger.debug(
            f"running command `{path} {app.version_test}` failed "
            f"with exit code {result.returncode}"
        )
        return None

    text = result.stdout.decode("utf-8", errors="replace")

    try:
        return app.format_version_output(text)
    except MalformedVersionOutputError as e:
        logger.debug(f"system version not found for {app.executable_name}: {e}")
        return None


def find_system(
    app: Application, version: Optional[str] = None
) -> Optional[Tuple[Path, str]]:
    """
    Try to find a globally installed version of the application and ensure it
    is the needed release version.

    Args:
        app: Application to look for
        version: Required version; any version is accepted if None

    Returns:
        Tuple of (executable path, normalized version) or None
    """
    path = find_executable(app.executable_name)
    if path is None:
        logger.debug(f"{app.executable_name} not found on PATH")
        return None

    found_version = system_version(app, path)
    if found_version is None:
        return None

    if version is not None and version != found_version:
        logger.debug(
            f"system {app.executable_name} at {path} has version {found_version}, "
            f"need {version}"
        )
        return None

    return path, found_version


__all__ = [
    "find_system",
    "system_version",
    "VERSION_CHECK_TIMEOUT",
]
