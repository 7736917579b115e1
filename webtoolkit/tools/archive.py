"""
Selective extraction from release archives.

Release archives are wrapped in one top-level folder whose name varies between
releases, so entries are looked up by their path with the first component
dropped (``dart-sass/src/dart`` is found as ``src/dart``).

Two container formats are supported behind the :class:`Archive` interface:

- :class:`TarGzArchive` reads a gzip-compressed tar stream sequentially. After
  one entry has been extracted the stream is consumed, so :meth:`Archive.reset`
  must be called before extracting another entry.
- :class:`ZipArchive` reads the zip central directory and can open any entry
  at any time; :meth:`Archive.reset` returns the same handle.

Usage:
    with open_archive(path, "tar.gz") as archive:
        archive.extract_file("bin/wasm-opt", target)
        archive = archive.reset()
        archive.extract_file("lib/libbinaryen.dylib", target)
"""

import logging
import shutil
import tarfile
import zipfile
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional

from ..core.exceptions import ArchiveEntryNotFoundError, ArchiveError, InstallError
from ..core.filesystem import (
    set_file_permissions,
    strip_first_component,
    validate_archive_path,
)
from .application import ARCHIVE_TAR_GZ, ARCHIVE_ZIP

logger = logging.getLogger(__name__)


class Archive(ABC):
    """
    One open archive container.

    The handle owns its underlying file and closes it in :meth:`close` or when
    used as a context manager.

    Attributes:
        requires_reset: True if :meth:`reset` must be called between two
            :meth:`extract_file` calls (sequential containers).
    """

    requires_reset: bool = False

    def __init__(self, path: Path):
        self.path = Path(path)

    @abstractmethod
    def extract_file(self, name: str, target: Path) -> Path:
        """
        Extract one entry to ``target / name``.

        Args:
            name: Entry path relative to the archive's top-level folder
            target: Directory to extract into

        Returns:
            Path of the written file

        Raises:
            ArchiveEntryNotFoundError: If no entry matches ``name``
            ArchiveError: If the archive cannot be read
            InstallError: If the output file cannot be written
        """

    @abstractmethod
    def reset(self) -> "Archive":
        """
        Prepare the archive for extracting another entry.

        Returns:
            The handle to use from now on; the old handle must not be used
        """

    @abstractmethod
    def close(self) -> None:
        """Close the underlying file."""

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TarGzArchive(Archive):
    """Sequential gzip-compressed tar archive."""

    requires_reset = True

    def __init__(self, path: Path):
        super().__init__(path)
        self._tar = self._open()
        self._consumed = False

    def _open(self) -> tarfile.TarFile:
        try:
            # Stream mode: entries can only be read front to back
            return tarfile.open(self.path, mode="r|gz")
        except (OSError, tarfile.TarError) as e:
            raise ArchiveError(f"failed opening archive {self.path}: {e}") from e

    def extract_file(self, name: str, target: Path) -> Path:
        validate_archive_path(name)

        if self._consumed:
            raise ArchiveError(
                f"archive {self.path} must be reset before extracting {name}"
            )
        self._consumed = True

        try:
            for member in self._tar:
                if strip_first_component(member.name) != name:
                    continue
                if not member.isfile():
                    raise ArchiveError(
                        f"archive entry {member.name} in {self.path} is not a regular file"
                    )

                source = self._tar.extractfile(member)
                if source is None:
                    break
                with source:
                    out = _write_entry(source, name, target)
                set_file_permissions(out, member.mode)
                logger.debug(f"Extracted {member.name} to {out}")
                return out
        except (OSError, EOFError, zlib.error, tarfile.TarError) as e:
            raise ArchiveError(f"error reading archive {self.path}: {e}") from e

        raise ArchiveEntryNotFoundError(name, str(self.path))

    def reset(self) -> "TarGzArchive":
        # The gzip stream cannot seek backwards across entries, re-open from
        # offset zero with a fresh decompressor.
        self.close()
        return TarGzArchive(self.path)

    def close(self) -> None:
        self._tar.close()


class ZipArchive(Archive):
    """Random-access zip archive."""

    requires_reset = False

    def __init__(self, path: Path):
        super().__init__(path)
        try:
            self._zip = zipfile.ZipFile(self.path, "r")
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(f"failed opening archive {self.path}: {e}") from e

    def _find_entry(self, name: str) -> Optional[zipfile.ZipInfo]:
        for info in self._zip.infolist():
            if info.is_dir():
                continue
            if strip_first_component(info.filename) == name:
                return info
        return None

    def extract_file(self, name: str, target: Path) -> Path:
        validate_archive_path(name)

        info = self._find_entry(name)
        if info is None:
            raise ArchiveEntryNotFoundError(name, str(self.path))

        try:
            with self._zip.open(info) as source:
                out = _write_entry(source, name, target)
        except (zipfile.BadZipFile, EOFError, zlib.error) as e:
            raise ArchiveError(f"error reading archive {self.path}: {e}") from e

        # Unix permission bits live in the high word of the external attributes
        mode = info.external_attr >> 16
        if mode:
            set_file_permissions(out, mode)
        logger.debug(f"Extracted {info.filename} to {out}")
        return out

    def reset(self) -> "ZipArchive":
        return self

    def close(self) -> None:
        self._zip.close()


def _write_entry(source: BinaryIO, name: str, target: Path) -> Path:
    """Copy an entry's bytes to ``target / name``, creating parent directories."""
    out = Path(target) / name

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"failed creating output directory {out.parent}: {e}") from e

    try:
        with open(out, "wb") as f:
            shutil.copyfileobj(source, f)
    except OSError as e:
        raise InstallError(
            f"failed copying over final output file {out} from archive: {e}"
        ) from e

    return out


def open_archive(path: Path, archive_format: str) -> Archive:
    """
    Open an archive of the given container format.

    Args:
        path: Archive file
        archive_format: 'tar.gz' or 'zip'

    Raises:
        ValueError: If the format is unknown
        ArchiveError: If the archive cannot be opened
    """
    if archive_format == ARCHIVE_TAR_GZ:
        return TarGzArchive(path)
    if archive_format == ARCHIVE_ZIP:
        return ZipArchive(path)
    raise ValueError(f"Unsupported archive format: {archive_format}")


__all__ = [
    "Archive",
    "TarGzArchive",
    "ZipArchive",
    "open_archive",
]
