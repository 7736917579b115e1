"""
Descriptions of the external build tools webtoolkit can locate and download.

Each supported tool is a member of the closed :class:`Application` enum. All
per-tool facts (archive layout, default version, release URL, version check)
are pure lookups keyed by the member and a :class:`PlatformInfo`.
"""

import enum
from typing import Dict, Optional, Tuple

from ..core.exceptions import MalformedVersionOutputError, UnsupportedPlatformError
from ..core.platform import PlatformInfo, detect_platform

SUPPORTED_OS = ("windows", "macos", "linux")
SUPPORTED_ARCH = ("x86_64", "aarch64")

ARCHIVE_TAR_GZ = "tar.gz"
ARCHIVE_ZIP = "zip"

SASS_RELEASES = "https://github.com/sass/dart-sass/releases/download/{version}"
WASM_BINDGEN_RELEASES = (
    "https://github.com/rustwasm/wasm-bindgen/releases/download/{version}"
)
BINARYEN_RELEASES = "https://github.com/WebAssembly/binaryen/releases/download/{version}"

# (os, arch) -> archive file name template
_SASS_FILES: Dict[Tuple[str, str], str] = {
    ("windows", "x86_64"): "dart-sass-{version}-windows-x64.zip",
    ("macos", "x86_64"): "dart-sass-{version}-macos-x64.tar.gz",
    ("linux", "x86_64"): "dart-sass-{version}-linux-x64.tar.gz",
    ("macos", "aarch64"): "dart-sass-{version}-macos-arm64.tar.gz",
    ("linux", "aarch64"): "dart-sass-{version}-linux-arm64.tar.gz",
}

# wasm-bindgen only publishes x86_64 binaries
_WASM_BINDGEN_FILES: Dict[Tuple[str, str], str] = {
    ("windows", "x86_64"): "wasm-bindgen-{version}-x86_64-pc-windows-msvc.tar.gz",
    ("macos", "x86_64"): "wasm-bindgen-{version}-x86_64-apple-darwin.tar.gz",
    ("linux", "x86_64"): "wasm-bindgen-{version}-x86_64-unknown-linux-musl.tar.gz",
}

_BINARYEN_FILES: Dict[Tuple[str, str], str] = {
    ("windows", "x86_64"): "binaryen-{version}-x86_64-windows.tar.gz",
    ("macos", "x86_64"): "binaryen-{version}-x86_64-macos.tar.gz",
    ("linux", "x86_64"): "binaryen-{version}-x86_64-linux.tar.gz",
    ("macos", "aarch64"): "binaryen-{version}-arm64-macos.tar.gz",
    ("linux", "aarch64"): "binaryen-{version}-aarch64-linux.tar.gz",
}


class Application(enum.Enum):
    """The application to locate and eventually download when calling ``get``."""

    SASS = "sass"
    # wasm-bindgen for generating the JS bindings.
    WASM_BINDGEN = "wasm-bindgen"
    # wasm-opt to improve performance and size of the output file further.
    WASM_OPT = "wasm-opt"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Application":
        """
        Look up an application by its executable base name.

        Raises:
            ValueError: If the name is not a supported tool
        """
        for app in cls:
            if app.value == name:
                return app
        supported = ", ".join(app.value for app in cls)
        raise ValueError(f"Unknown tool: {name}. Supported: {supported}")

    @property
    def executable_name(self) -> str:
        """Base name of the executable without extension."""
        return self.value

    def path(self, platform: Optional[PlatformInfo] = None) -> str:
        """Path of the executable within the downloaded archive."""
        platform = platform or detect_platform()

        if platform.is_windows:
            return {
                Application.SASS: "sass.bat",
                Application.WASM_BINDGEN: "wasm-bindgen.exe",
                Application.WASM_OPT: "bin/wasm-opt.exe",
            }[self]
        return {
            Application.SASS: "sass",
            Application.WASM_BINDGEN: "wasm-bindgen",
            Application.WASM_OPT: "bin/wasm-opt",
        }[self]

    def extra_paths(self, platform: Optional[PlatformInfo] = None) -> Tuple[str, ...]:
        """Additional files included in the archive that are required to run the main binary."""
        platform = platform or detect_platform()

        if self is Application.SASS:
            if platform.os == "windows":
                return ("src/dart.exe", "src/sass.snapshot")
            if platform.os == "macos":
                return ("src/dart", "src/sass.snapshot")
            return ()
        if self is Application.WASM_OPT:
            if platform.os == "macos":
                return ("lib/libbinaryen.dylib",)
            return ()
        return ()

    @property
    def default_version(self) -> str:
        """Default version to use if not set by the user."""
        return {
            Application.SASS: "1.54.9",
            Application.WASM_BINDGEN: "0.2.83",
            Application.WASM_OPT: "version_110",
        }[self]

    def url(self, version: str, platform: Optional[PlatformInfo] = None) -> str:
        """
        Direct URL to the release of an application for download.

        Args:
            version: Release version (e.g. '1.54.9', 'version_110')
            platform: Target platform (auto-detected if None)

        Returns:
            Download URL string

        Raises:
            UnsupportedPlatformError: If no release exists for the platform
        """
        platform = platform or detect_platform()

        if platform.os not in SUPPORTED_OS or platform.arch not in SUPPORTED_ARCH:
            raise UnsupportedPlatformError(self.value, platform.os, platform.arch)

        if self is Application.SASS:
            base, files = SASS_RELEASES, _SASS_FILES
        elif self is Application.WASM_BINDGEN:
            base, files = WASM_BINDGEN_RELEASES, _WASM_BINDGEN_FILES
        else:
            base, files = BINARYEN_RELEASES, _BINARYEN_FILES

        filename = files.get((platform.os, platform.arch))
        if filename is None:
            raise UnsupportedPlatformError(self.value, platform.os, platform.arch)

        return f"{base.format(version=version)}/{filename.format(version=version)}"

    def archive_format(self, platform: Optional[PlatformInfo] = None) -> str:
        """Container format of the release archive ('zip' or 'tar.gz')."""
        platform = platform or detect_platform()

        if self is Application.SASS and platform.is_windows:
            return ARCHIVE_ZIP
        return ARCHIVE_TAR_GZ

    @property
    def version_test(self) -> str:
        """The CLI subcommand, flag or option used to check the application's version."""
        return {
            Application.SASS: "--version",
            Application.WASM_BINDGEN: "--version",
            Application.WASM_OPT: "--version",
        }[self]

    def format_version_output(self, text: str) -> str:
        """
        Format the output of version checking the app.

        Examples:
            >>> Application.WASM_OPT.format_version_output("wasm-opt version 101")
            'version_101'
            >>> Application.WASM_BINDGEN.format_version_output("wasm-bindgen 0.2.75")
            '0.2.75'

        Raises:
            MalformedVersionOutputError: If the expected line or token is missing
        """
        text = text.strip()

        if self is Application.SASS:
            lines = text.splitlines()
            if not lines or not lines[0]:
                raise MalformedVersionOutputError(self.value, text)
            return lines[0]

        tokens = text.split(" ")

        if self is Application.WASM_BINDGEN:
            if len(tokens) < 2:
                raise MalformedVersionOutputError(self.value, text)
            return tokens[1]

        if len(tokens) < 3:
            raise MalformedVersionOutputError(self.value, text)
        return f"version_{tokens[2]}"


__all__ = [
    "Application",
    "ARCHIVE_TAR_GZ",
    "ARCHIVE_ZIP",
    "SUPPORTED_OS",
    "SUPPORTED_ARCH",
]
