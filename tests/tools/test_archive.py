"""
Unit tests for selective archive extraction.

Tests cover:
- Top-level folder stripping for both container formats
- Reset semantics (sequential tar.gz vs random-access zip)
- Permission bits carried over from archive metadata
- Missing entries and unsafe names
"""

import stat
import tarfile

import pytest

from webtoolkit.core.exceptions import (
    ArchiveEntryNotFoundError,
    ArchiveError,
    InsecureArchiveError,
)
from webtoolkit.core.filesystem import IS_WINDOWS
from webtoolkit.tools.archive import TarGzArchive, ZipArchive, open_archive

from tests.utils import ArchiveBuilder, corrupt_zip_member

posix_only = pytest.mark.skipif(IS_WINDOWS, reason="POSIX permission bits")


@pytest.fixture
def sass_release():
    """Builder with the layout of a Dart Sass release."""
    return (
        ArchiveBuilder("dart-sass")
        .with_directory("src")
        .with_executable("sass", b"#!/bin/sh\necho sass\n")
        .with_executable("src/dart", b"dart-vm")
        .with_file("src/sass.snapshot", b"snapshot")
    )


class TestTarGzArchive:
    """Tests for sequential tar.gz extraction."""

    def test_extract_strips_top_level_folder(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        target = tmp_path / "out"

        with TarGzArchive(path) as archive:
            out = archive.extract_file("sass", target)

        assert out == target / "sass"
        assert out.read_bytes() == b"#!/bin/sh\necho sass\n"
        assert not (target / "dart-sass").exists()

    def test_extract_nested_entry(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        target = tmp_path / "out"

        with TarGzArchive(path) as archive:
            archive.extract_file("src/sass.snapshot", target)

        assert (target / "src" / "sass.snapshot").read_bytes() == b"snapshot"

    def test_requires_reset_between_extractions(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        target = tmp_path / "out"

        archive = TarGzArchive(path)
        try:
            archive.extract_file("sass", target)
            with pytest.raises(ArchiveError, match="must be reset"):
                archive.extract_file("src/dart", target)
        finally:
            archive.close()

    def test_reset_allows_earlier_entry(self, tmp_path, sass_release):
        """An entry stored before the previous one is still found after reset."""
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        target = tmp_path / "out"

        archive = TarGzArchive(path)
        try:
            archive.extract_file("src/sass.snapshot", target)
            archive = archive.reset()
            archive.extract_file("sass", target)
        finally:
            archive.close()

        assert TarGzArchive.requires_reset is True
        assert (target / "sass").exists()
        assert (target / "src" / "sass.snapshot").exists()

    @posix_only
    def test_permissions_preserved(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        target = tmp_path / "out"

        with TarGzArchive(path) as archive:
            out = archive.extract_file("sass", target)
        with TarGzArchive(path) as archive:
            snapshot = archive.extract_file("src/sass.snapshot", target)

        assert stat.S_IMODE(out.stat().st_mode) == 0o755
        assert stat.S_IMODE(snapshot.stat().st_mode) == 0o644

    def test_entry_not_found(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")

        with TarGzArchive(path) as archive:
            with pytest.raises(ArchiveEntryNotFoundError) as exc_info:
                archive.extract_file("bin/wasm-opt", tmp_path / "out")

        assert exc_info.value.entry == "bin/wasm-opt"
        assert str(path) in str(exc_info.value)

    def test_top_level_file_is_not_matched(self, tmp_path):
        """Entries without a top-level folder have nothing left after stripping."""
        path = ArchiveBuilder("").with_file("sass", b"x").build_tar_gz(tmp_path / "a.tar.gz")

        with TarGzArchive(path) as archive:
            with pytest.raises(ArchiveEntryNotFoundError):
                archive.extract_file("sass", tmp_path / "out")

    def test_dot_prefixed_entries(self, tmp_path):
        """Entries recorded as ./<folder>/<path> match like <folder>/<path>."""
        path = (
            ArchiveBuilder("./dart-sass")
            .with_executable("sass", b"sass")
            .build_tar_gz(tmp_path / "sass.tar.gz")
        )

        with TarGzArchive(path) as archive:
            out = archive.extract_file("sass", tmp_path / "out")

        assert out.read_bytes() == b"sass"

    def test_directory_entry_is_rejected(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")

        with TarGzArchive(path) as archive:
            with pytest.raises(ArchiveError, match="not a regular file"):
                archive.extract_file("src", tmp_path / "out")

    def test_insecure_name_rejected(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")

        with TarGzArchive(path) as archive:
            with pytest.raises(InsecureArchiveError):
                archive.extract_file("../escape", tmp_path / "out")

        assert not (tmp_path / "escape").exists()

    def test_corrupt_archive(self, tmp_path):
        path = tmp_path / "broken.tar.gz"
        path.write_bytes(b"this is not gzip data")

        with pytest.raises(ArchiveError):
            with TarGzArchive(path) as archive:
                archive.extract_file("sass", tmp_path / "out")

    def test_symlink_entry_is_rejected(self, tmp_path):
        path = tmp_path / "link.tar.gz"
        with tarfile.open(path, "w:gz") as tar:
            info = tarfile.TarInfo("release/sass")
            info.type = tarfile.SYMTYPE
            info.linkname = "/etc/passwd"
            tar.addfile(info)

        with TarGzArchive(path) as archive:
            with pytest.raises(ArchiveError, match="not a regular file"):
                archive.extract_file("sass", tmp_path / "out")


class TestZipArchive:
    """Tests for random-access zip extraction."""

    def test_extract_strips_top_level_folder(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")
        target = tmp_path / "out"

        with ZipArchive(path) as archive:
            out = archive.extract_file("src/dart", target)

        assert out == target / "src" / "dart"
        assert out.read_bytes() == b"dart-vm"

    def test_reset_returns_same_handle(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")

        with ZipArchive(path) as archive:
            assert archive.reset() is archive
            assert ZipArchive.requires_reset is False

    def test_multiple_extractions_without_reset(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")
        target = tmp_path / "out"

        with ZipArchive(path) as archive:
            archive.extract_file("src/sass.snapshot", target)
            archive.extract_file("sass", target)
            archive.extract_file("src/dart", target)

        assert sorted(p.name for p in target.rglob("*") if p.is_file()) == [
            "dart",
            "sass",
            "sass.snapshot",
        ]

    @posix_only
    def test_permissions_preserved(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")
        target = tmp_path / "out"

        with ZipArchive(path) as archive:
            out = archive.extract_file("sass", target)

        assert stat.S_IMODE(out.stat().st_mode) == 0o755

    def test_directory_entries_are_skipped(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")

        with ZipArchive(path) as archive:
            with pytest.raises(ArchiveEntryNotFoundError):
                archive.extract_file("src", tmp_path / "out")

    def test_entry_not_found(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")

        with ZipArchive(path) as archive:
            with pytest.raises(ArchiveEntryNotFoundError, match="sass.bat"):
                archive.extract_file("sass.bat", tmp_path / "out")

    def test_corrupt_archive(self, tmp_path):
        path = tmp_path / "broken.zip"
        path.write_bytes(b"PK but not really")

        with pytest.raises(ArchiveError, match="failed opening archive"):
            ZipArchive(path)

    def test_corrupt_member_data(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")
        corrupt_zip_member(path, "dart-sass/src/sass.snapshot")

        with ZipArchive(path) as archive:
            with pytest.raises(ArchiveError, match="error reading archive"):
                archive.extract_file("src/sass.snapshot", tmp_path / "out")


class TestOpenArchive:
    """Tests for the format dispatcher."""

    def test_tar_gz(self, tmp_path, sass_release):
        path = sass_release.build_tar_gz(tmp_path / "sass.tar.gz")
        with open_archive(path, "tar.gz") as archive:
            assert isinstance(archive, TarGzArchive)

    def test_zip(self, tmp_path, sass_release):
        path = sass_release.build_zip(tmp_path / "sass.zip")
        with open_archive(path, "zip") as archive:
            assert isinstance(archive, ZipArchive)

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported archive format"):
            open_archive(tmp_path / "x.7z", "7z")
