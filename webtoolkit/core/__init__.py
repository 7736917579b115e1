"""
Core functionality for webtoolkit.

This package contains the foundational modules the tool installer depends on.
"""

from .directory import (
    CACHE_DIR_ENV,
    get_cache_dir,
    get_default_cache_dir,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .exceptions import (
    WebToolkitError,
    UnsupportedPlatformError,
    MalformedVersionOutputError,
    DownloadError,
    ArchiveError,
    ArchiveEntryNotFoundError,
    InsecureArchiveError,
    InstallError,
    ConfigError,
)

__all__ = [
    "CACHE_DIR_ENV",
    "get_cache_dir",
    "get_default_cache_dir",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "WebToolkitError",
    "UnsupportedPlatformError",
    "MalformedVersionOutputError",
    "DownloadError",
    "ArchiveError",
    "ArchiveEntryNotFoundError",
    "InsecureArchiveError",
    "InstallError",
    "ConfigError",
]
