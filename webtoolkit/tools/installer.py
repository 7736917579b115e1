"""
Download and installation of tool releases.

``download`` fetches the release archive of a tool into the cache root and
``install`` extracts the files the tool needs from it into the tool's install
directory.
"""

import logging
from pathlib import Path
from typing import Optional

from ..core.directory import app_dir_name, get_cache_dir
from ..core.download import DEFAULT_TIMEOUT, download_file
from ..core.platform import PlatformInfo, detect_platform
from .application import Application
from .archive import open_archive

logger = logging.getLogger(__name__)


def temp_archive_path(app: Application, version: str, cache_dir: Path) -> Path:
    """Deterministic location of the archive while it is being downloaded."""
    return Path(cache_dir) / f"{app_dir_name(app.executable_name, version)}.tmp"


def download(
    app: Application,
    version: str,
    cache_dir: Optional[Path] = None,
    platform: Optional[PlatformInfo] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Path:
    """
    Download the release archive of an application.

    The archive is written to ``<cache_dir>/<tool>-<version>.tmp``; the caller
    deletes it after a successful install.

    Args:
        app: Application to download
        version: Release version
        cache_dir: Cache root (resolved with ``get_cache_dir`` if None)
        platform: Target platform (auto-detected if None)
        timeout: Request timeout in seconds

    Returns:
        Path to the downloaded archive

    Raises:
        UnsupportedPlatformError: If no release exists for the platform
        DownloadError: If the download fails
        InstallError: If the archive cannot be written
    """
    logger.info(f"downloading {app.executable_name} {version}")

    cache_dir = get_cache_dir(cache_dir)
    url = app.url(version, platform)
    destination = temp_archive_path(app, version, cache_dir)

    logger.debug(f"{app.executable_name} download URL: {url}")
    return download_file(url, destination, timeout=timeout)


def install(
    app: Application,
    archive_path: Path,
    target: Path,
    platform: Optional[PlatformInfo] = None,
) -> Path:
    """
    Install an application from a downloaded archive, locating and copying its
    files to the given target location.

    The main executable is extracted first, then every extra path in order.
    Files already extracted are left in place if a later step fails.

    Args:
        app: Application contained in the archive
        archive_path: Downloaded release archive
        target: Install directory
        platform: Platform the archive was built for (auto-detected if None)

    Returns:
        Path of the installed executable

    Raises:
        ArchiveEntryNotFoundError: If a required file is missing
        ArchiveError: If the archive cannot be read
        InstallError: If files cannot be written
    """
    platform = platform or detect_platform()
    target = Path(target)

    logger.info(f"installing {app.executable_name}")

    archive = open_archive(archive_path, app.archive_format(platform))
    try:
        executable = archive.extract_file(app.path(platform), target)

        for path in app.extra_paths(platform):
            # After extracting one file the archive must be reset.
            archive = archive.reset()
            archive.extract_file(path, target)
    finally:
        archive.close()

    logger.info(f"{app.executable_name} installed to {target}")
    return executable


__all__ = [
    "download",
    "install",
    "temp_archive_path",
]
