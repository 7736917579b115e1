"""
Test utilities for webtoolkit testing.

This package provides test data builders and helper utilities to simplify
test writing and improve test readability.
"""

from .builders import ArchiveBuilder
from .helpers import corrupt_zip_member, write_script

__all__ = [
    # Builders
    "ArchiveBuilder",
    # Helpers
    "corrupt_zip_member",
    "write_script",
]
