"""
Build tool management.

Describes the supported tools, finds system installs, and downloads and
installs releases into the cache root on demand.
"""

from .application import Application
from .archive import Archive, TarGzArchive, ZipArchive, open_archive
from .cache import GLOBAL_INSTALL_CACHE, InstallCache
from .installer import download, install
from .resolver import get, get_async, install_dir
from .system import find_system

__all__ = [
    "Application",
    "Archive",
    "TarGzArchive",
    "ZipArchive",
    "open_archive",
    "GLOBAL_INSTALL_CACHE",
    "InstallCache",
    "download",
    "install",
    "get",
    "get_async",
    "install_dir",
    "find_system",
]
