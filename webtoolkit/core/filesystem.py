"""
Cross-platform file system utilities for webtoolkit.

This module provides the small set of platform-aware file operations the
installer relies on:
- Executable detection and PATH lookup
- Permission bits from archive metadata
- Archive member path validation
- Temporary archive cleanup
"""

import os
import shutil
import stat
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .exceptions import InsecureArchiveError, InstallError

# Platform detection
IS_WINDOWS = os.name == "nt"


# ============================================================================
# Executables
# ============================================================================


def is_executable(path: Union[str, Path]) -> bool:
    """
    Check whether a path points to a runnable executable.

    On Windows any existing regular file counts; elsewhere at least one of the
    execute bits must be set.

    Args:
        path: Path to check

    Returns:
        True if the path is an executable file
    """
    path = Path(path)

    try:
        st = path.stat()
    except OSError:
        return False

    if not stat.S_ISREG(st.st_mode):
        return False

    if IS_WINDOWS:
        return True

    return bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def find_executable(name: str) -> Optional[Path]:
    """
    Find an executable in the system PATH.

    Args:
        name: Executable base name (e.g., 'sass', 'wasm-opt')

    Returns:
        Path to executable if found, None otherwise

    Example:
        >>> find_executable('wasm-opt')
        PosixPath('/usr/bin/wasm-opt')
    """
    found = shutil.which(name)
    return Path(found) if found else None


def set_file_permissions(path: Path, mode: int) -> None:
    """
    Apply permission bits recorded in an archive. Only has an effect on UNIX.

    Args:
        path: File to update
        mode: Permission bits (e.g. 0o755); file type bits are ignored

    Raises:
        InstallError: If the permissions cannot be changed
    """
    if IS_WINDOWS:
        return

    try:
        os.chmod(path, stat.S_IMODE(mode))
    except OSError as e:
        raise InstallError(f"failed setting file permissions on {path}: {e}") from e


# ============================================================================
# Archive Paths
# ============================================================================


def validate_archive_path(name: str) -> None:
    """
    Validate that a relative path requested from an archive is safe to write.

    Prevents directory traversal (absolute paths or '..' components).

    Args:
        name: Relative path inside the extraction target

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member = PurePosixPath(name.replace("\\", "/"))

    if member.is_absolute() or ".." in member.parts or not member.parts:
        raise InsecureArchiveError(
            f"Archive member '{name}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def strip_first_component(name: str) -> Optional[str]:
    """
    Drop the first path component of an archive entry name.

    Release archives are wrapped in a single top-level folder whose name varies
    between releases, so entries are matched by the remainder.

    Empty and `.` components are ignored before stripping, so `./dart-sass/sass`
    and `dart-sass/sass` both match `sass`.

    Args:
        name: Entry name as stored in the archive (POSIX separators)

    Returns:
        The remaining path, or None if the entry has a single component

    Example:
        >>> strip_first_component('dart-sass/src/dart')
        'src/dart'
    """
    parts = [part for part in PurePosixPath(name).parts if part not in ("", ".")]
    if len(parts) < 2:
        return None
    return str(PurePosixPath(*parts[1:]))


# ============================================================================
# Safe File Operations
# ============================================================================


def remove_file(path: Union[str, Path]) -> None:
    """
    Delete a single file.

    Raises:
        InstallError: If deletion fails
    """
    try:
        Path(path).unlink()
    except OSError as e:
        raise InstallError(f"failed deleting temporary archive {path}: {e}") from e


__all__ = [
    "IS_WINDOWS",
    "is_executable",
    "find_executable",
    "set_file_permissions",
    "validate_archive_path",
    "strip_first_component",
    "remove_file",
]
