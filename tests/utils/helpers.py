"""
Helper utilities for webtoolkit testing.
"""

import os
import struct
import zipfile
from pathlib import Path


def write_script(path: Path, stdout: str = "", exit_code: int = 0) -> Path:
    """
    Write an executable shell script that prints fixed output.

    Only usable on POSIX systems.

    Args:
        path: Script location
        stdout: Text the script prints
        exit_code: Exit status of the script

    Returns:
        Path to the script
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    escaped = stdout.replace("'", "'\"'\"'")
    path.write_text(f"#!/bin/sh\nprintf '%s\\n' '{escaped}'\nexit {exit_code}\n")
    os.chmod(path, 0o755)
    return path


def corrupt_zip_member(path: Path, name: str) -> Path:
    """
    Overwrite the compressed bytes of one zip member in place.

    The central directory stays intact, so the archive opens and lists fine;
    only decompressing the member fails.

    Args:
        path: Zip archive built with ZIP_DEFLATED
        name: Full member name inside the archive

    Returns:
        Path to the archive
    """
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(name)

    data = bytearray(path.read_bytes())
    # Local file header: 30 fixed bytes, then file name and extra field
    offset = info.header_offset
    name_len, extra_len = struct.unpack("<HH", data[offset + 26 : offset + 30])
    start = offset + 30 + name_len + extra_len
    # 0xFF starts a deflate block with the reserved block type
    data[start : start + info.compress_size] = b"\xff" * info.compress_size
    path.write_bytes(bytes(data))
    return path
