"""
webtoolkit - locate and download the external tools of a web build pipeline.

Usage:
    from webtoolkit import Application, get

    wasm_opt = get(Application.WASM_OPT)
    sass = get(Application.SASS, "1.54.9")
"""

from .core.exceptions import (
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
from .tools import Application, get, get_async

__version__ = "0.1.0"

__all__ = [
    "Application",
    "get",
    "get_async",
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
