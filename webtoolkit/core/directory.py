"""
Cache directory management for webtoolkit.

Downloaded tools live under a single cache root:

    <cache_root>/
        sass-1.54.9/            : extracted Dart Sass release
        wasm-bindgen-0.2.83/    : extracted wasm-bindgen release
        wasm-opt-version_110/   : extracted Binaryen release
        <tool>-<version>.tmp    : archive being downloaded (transient)

The root can be overridden with the WEBTOOLKIT_CACHE_DIR environment variable.
"""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from .exceptions import InstallError

# Environment variable to override the cache root
CACHE_DIR_ENV = "WEBTOOLKIT_CACHE_DIR"

APP_NAME = "webtoolkit"


def get_default_cache_dir() -> Path:
    """
    Get the platform-specific user cache directory path.

    Returns:
        Path: The cache directory path.
            - Windows: %LOCALAPPDATA%\\webtoolkit\\cache
            - macOS: ~/Library/Caches/webtoolkit
            - Linux: $XDG_CACHE_HOME/webtoolkit or ~/.cache/webtoolkit
    """
    if os.name == "nt":
        local_app_data = os.environ.get("LOCALAPPDATA")
        base = Path(local_app_data) if local_app_data else Path.home() / "AppData" / "Local"
        return base / APP_NAME / "cache"

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / APP_NAME

    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg_cache) if xdg_cache else Path.home() / ".cache"
    return base / APP_NAME


def get_cache_dir(override: Optional[Union[str, Path]] = None) -> Path:
    """
    Locate the cache directory and make sure it exists.

    Resolution order:
    1. ``override`` argument (if given)
    2. WEBTOOLKIT_CACHE_DIR environment variable (if set)
    3. Platform user cache directory

    Args:
        override: Explicit cache directory, e.g. from configuration

    Returns:
        Absolute path of an existing directory

    Raises:
        InstallError: If the directory cannot be created
    """
    if override is not None:
        path = Path(override)
    elif os.environ.get(CACHE_DIR_ENV):
        path = Path(os.environ[CACHE_DIR_ENV])
    else:
        path = get_default_cache_dir()

    path = path.expanduser().absolute()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"failed creating cache directory {path}: {e}") from e
    return path


def app_dir_name(name: str, version: str) -> str:
    """Directory name of one installed tool version, e.g. ``sass-1.54.9``."""
    return f"{name}-{version}"


__all__ = [
    "CACHE_DIR_ENV",
    "get_default_cache_dir",
    "get_cache_dir",
    "app_dir_name",
]
