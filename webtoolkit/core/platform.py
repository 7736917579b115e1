"""
Platform detection for webtoolkit.

This module detects the current operating system and CPU architecture so the
tool descriptions can select the matching release archive.

Usage:
    from webtoolkit.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"Platform string: {platform_info.platform_string()}")
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', or the raw lowercase
            system name for anything else)
        arch: CPU architecture ('x86_64', 'aarch64', or the raw lowercase
            machine name for anything else)
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x86_64', 'macos-aarch64').

        Example:
            >>> PlatformInfo('linux', 'x86_64').platform_string()
            'linux-x86_64'
        """
        return f"{self.os}-{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Unknown systems are returned as-is (lowercased) so that callers can report
    them; the download tables reject them later.
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "darwin":
        return "macos"
    elif system == "linux":
        return "linux"
    return system


def _detect_architecture() -> str:
    """Detect CPU architecture, normalized to release naming."""
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "aarch64"
    return machine


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
]
