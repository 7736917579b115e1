"""
Locate build tools and download them if missing.

``get`` is the single entry point used by the build pipeline: it returns the
path of a runnable executable for the requested tool, preferring a matching
system install and otherwise installing the release into the cache root.
"""

import asyncio
import functools
import logging
from pathlib import Path
from typing import Optional

from ..core.directory import app_dir_name, get_cache_dir
from ..core.platform import PlatformInfo, detect_platform
from .application import Application
from .cache import GLOBAL_INSTALL_CACHE, InstallCache
from .system import find_system

logger = logging.getLogger(__name__)


def install_dir(app: Application, version: str, cache_dir: Path) -> Path:
    """Deterministic install directory of one tool version."""
    return Path(cache_dir) / app_dir_name(app.executable_name, version)


def get(
    app: Application,
    version: Optional[str] = None,
    cache_dir: Optional[Path] = None,
    platform: Optional[PlatformInfo] = None,
    cache: Optional[InstallCache] = None,
) -> Path:
    """
    Locate the given application and download it if missing.

    Args:
        app: Application to locate
        version: Required version (the tool's default version if None; any
            system version is accepted if None)
        cache_dir: Cache root (resolved with ``get_cache_dir`` if None)
        platform: Target platform (auto-detected if None)
        cache: Install cache to use (the process-wide cache if None)

    Returns:
        Path to a runnable executable

    Raises:
        WebToolkitError: If the tool cannot be located or installed

    Example:
        >>> from webtoolkit import Application, get
        >>> sass = get(Application.SASS, "1.54.9")
    """
    system = find_system(app, version)
    if system is not None:
        path, system_version = system
        logger.info(
            f"using system installed binary {app.executable_name} {system_version}"
        )
        return path

    platform = platform or detect_platform()
    cache_dir = get_cache_dir(cache_dir)
    if version is None:
        version = app.default_version
    app_dir = install_dir(app, version, cache_dir)
    bin_path = app_dir / app.path(platform)

    cache = cache or GLOBAL_INSTALL_CACHE
    if cache.is_installed(app, version):
        logger.debug(f"{app.executable_name} {version} already installed by this process")
    # Same-key callers share the outcome of a running install
    cache.install_once(app, version, app_dir, cache_dir=cache_dir, platform=platform)

    return bin_path


async def get_async(
    app: Application,
    version: Optional[str] = None,
    cache_dir: Optional[Path] = None,
) -> Path:
    """
    Asyncio variant of :func:`get`.

    Runs the lookup in the loop's default executor so that downloads and
    extraction never block the event loop.
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, functools.partial(get, app, version, cache_dir)
    )


__all__ = [
    "get",
    "get_async",
    "install_dir",
]
