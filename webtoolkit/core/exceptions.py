"""
Centralized exception hierarchy for webtoolkit.

Every error that can reach a caller of :func:`webtoolkit.get` derives from
:class:`WebToolkitError`, so a build pipeline can catch a single type.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class WebToolkitError(Exception):
    """Base exception for all webtoolkit errors."""

    pass


# ============================================================================
# Tool Description Exceptions
# ============================================================================


class UnsupportedPlatformError(WebToolkitError):
    """Raised when no release exists for the current OS/architecture."""

    def __init__(self, tool: str, os: str, arch: str):
        self.tool = tool
        self.os = os
        self.arch = arch
        super().__init__(f"Unable to download {tool} for {os} {arch}")


class MalformedVersionOutputError(WebToolkitError):
    """Raised when the output of a version check has an unexpected shape."""

    def __init__(self, tool: str, output: str):
        self.tool = tool
        self.output = output
        super().__init__(f"missing or malformed version output for {tool}: {output!r}")


# ============================================================================
# Download and Installation Exceptions
# ============================================================================


class DownloadError(WebToolkitError):
    """Raised when a release archive cannot be downloaded."""

    pass


class ArchiveError(WebToolkitError):
    """Base exception for archive reading errors."""

    pass


class ArchiveEntryNotFoundError(ArchiveError):
    """Raised when an expected file is missing from a release archive."""

    def __init__(self, entry: str, archive: str):
        self.entry = entry
        self.archive = archive
        super().__init__(f"file not found in archive {archive}: {entry}")


class InsecureArchiveError(ArchiveError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class InstallError(WebToolkitError):
    """Raised when files cannot be written, moved or removed during install."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(WebToolkitError):
    """Configuration parsing or validation error."""

    pass


__all__ = [
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
