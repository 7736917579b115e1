"""
Process-wide install cache.

Keeps track of which (tool, version) pairs have already been downloaded and
installed by this process so that the same tool is never downloaded twice
concurrently, while different tools or versions install in parallel.

This cache doesn't keep track of system-installed tools or of installs made
by previous runs; those are recognized by the resolver looking at the install
directory on disk.

Usage:
    from webtoolkit.tools.cache import GLOBAL_INSTALL_CACHE

    GLOBAL_INSTALL_CACHE.install_once(Application.SASS, "1.54.9", app_dir)
"""

import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from ..core.download import DEFAULT_TIMEOUT
from ..core.exceptions import WebToolkitError, InstallError
from ..core.filesystem import is_executable, remove_file
from ..core.platform import PlatformInfo
from .application import Application
from .installer import download, install

logger = logging.getLogger(__name__)

InstallKey = Tuple[Application, str]


class OnceCell:
    """
    Runs an initializer at most once successfully.

    While an attempt is in flight, other callers wait for it and receive its
    outcome: they return on success and re-raise the same exception on
    failure. A failed attempt is forgotten, so the next caller starts a new one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._initialized = False
        self._pending: Optional[Future] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def get_or_try_init(self, init: Callable[[], None]) -> None:
        """
        Run ``init`` unless it already succeeded, or wait for a running attempt.

        Raises:
            Exception: Whatever the attempt this caller observed raised
        """
        with self._lock:
            if self._initialized:
                return
            if self._pending is not None:
                pending = self._pending
                owner = False
            else:
                pending = self._pending = Future()
                owner = True

        if not owner:
            # Blocks until the owning caller finishes; raises its exception.
            pending.result()
            return

        try:
            init()
        except BaseException as e:
            with self._lock:
                self._pending = None
            pending.set_exception(e)
            raise

        with self._lock:
            self._initialized = True
            self._pending = None
        pending.set_result(None)


class InstallCache:
    """
    Maps install keys to one-shot cells.

    The map lock is only held while looking up or inserting a cell; the
    download and installation run outside of it.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self._lock = threading.Lock()
        self._cells: Dict[InstallKey, OnceCell] = {}
        self.timeout = timeout

    def _cell(self, key: InstallKey) -> OnceCell:
        with self._lock:
            cell = self._cells.get(key)
            if cell is None:
                cell = self._cells[key] = OnceCell()
            return cell

    def is_installed(self, app: Application, version: str) -> bool:
        """Check whether this process already installed the given key."""
        with self._lock:
            cell = self._cells.get((app, version))
        return cell is not None and cell.initialized

    def install_once(
        self,
        app: Application,
        version: str,
        app_dir: Path,
        cache_dir: Optional[Path] = None,
        platform: Optional[PlatformInfo] = None,
    ) -> None:
        """
        Install the desired application of given version to the provided
        application directory. Or don't if it's already been installed.

        An executable left at the expected path by an earlier process counts as
        installed. The check runs inside the per-key attempt, so callers that
        arrive while an install is running wait for its outcome.

        Args:
            app: Application to install
            version: Release version
            app_dir: Install directory
            cache_dir: Cache root for the temporary archive
            platform: Target platform (auto-detected if None)

        Raises:
            WebToolkitError: If downloading or installing fails
        """

        def run() -> None:
            executable = Path(app_dir) / app.path(platform)
            if is_executable(executable):
                logger.debug(
                    f"{app.executable_name} {version} already installed at {executable}"
                )
                return

            archive_path = download(
                app, version, cache_dir=cache_dir, platform=platform, timeout=self.timeout
            )
            try:
                install(app, archive_path, app_dir, platform=platform)
            except WebToolkitError:
                raise
            except OSError as e:
                raise InstallError(
                    f"failed installing {app.executable_name} {version} "
                    f"to {app_dir}: {e}"
                ) from e
            remove_file(archive_path)

        self._cell((app, version)).get_or_try_init(run)


# Global, application wide install cache.
GLOBAL_INSTALL_CACHE = InstallCache()


__all__ = [
    "GLOBAL_INSTALL_CACHE",
    "InstallCache",
    "InstallKey",
    "OnceCell",
]
