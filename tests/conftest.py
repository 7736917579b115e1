"""
Pytest configuration and shared fixtures for webtoolkit tests.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from webtoolkit.core.platform import PlatformInfo


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """
    Skip integration tests unless --integration flag is provided.
    """
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def linux_x64() -> PlatformInfo:
    """Linux x86_64 platform."""
    return PlatformInfo("linux", "x86_64")


@pytest.fixture
def macos_arm64() -> PlatformInfo:
    """macOS Apple Silicon platform."""
    return PlatformInfo("macos", "aarch64")


@pytest.fixture
def windows_x64() -> PlatformInfo:
    """Windows x86_64 platform."""
    return PlatformInfo("windows", "x86_64")


@pytest.fixture
def cache_dir(tmp_path: Path, monkeypatch) -> Path:
    """Isolated cache root, also exported through WEBTOOLKIT_CACHE_DIR."""
    cache = tmp_path / "cache"
    cache.mkdir()
    monkeypatch.setenv("WEBTOOLKIT_CACHE_DIR", str(cache))
    return cache


@pytest.fixture
def no_system_tools():
    """Pretend no tool is installed on the system PATH."""
    with patch("webtoolkit.tools.resolver.find_system", return_value=None) as mock:
        yield mock
