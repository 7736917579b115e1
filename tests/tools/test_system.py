"""
Tests for system tool detection.

Fake tools are shell scripts placed on a private PATH, so these tests only run
on POSIX systems.
"""

import subprocess

import pytest
from unittest.mock import patch

from webtoolkit.core.filesystem import IS_WINDOWS
from webtoolkit.tools.application import Application
from webtoolkit.tools.system import find_system, system_version

from tests.utils import write_script

pytestmark = pytest.mark.skipif(IS_WINDOWS, reason="uses POSIX shell scripts")


@pytest.fixture
def fake_path(tmp_path, monkeypatch):
    """Directory that is the only entry on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


class TestSystemVersion:
    """Tests for running and parsing a tool's version check."""

    def test_parses_output(self, tmp_path):
        script = write_script(tmp_path / "wasm-opt", "wasm-opt version 110 (version_110)")
        assert system_version(Application.WASM_OPT, script) == "version_110"

    def test_nonzero_exit_is_not_found(self, tmp_path):
        script = write_script(tmp_path / "sass", "1.54.9", exit_code=1)
        assert system_version(Application.SASS, script) is None

    def test_malformed_output_is_not_found(self, tmp_path):
        script = write_script(tmp_path / "wasm-bindgen", "garbage")
        assert system_version(Application.WASM_BINDGEN, script) is None

    def test_missing_executable_is_not_found(self, tmp_path):
        assert system_version(Application.SASS, tmp_path / "missing") is None

    def test_timeout_is_not_found(self, tmp_path):
        with patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="sass", timeout=10),
        ):
            assert system_version(Application.SASS, tmp_path / "sass") is None


class TestFindSystem:
    """Tests for find_system()."""

    def test_not_on_path(self, fake_path):
        assert find_system(Application.SASS) is None

    def test_any_version_when_unpinned(self, fake_path):
        script = write_script(fake_path / "wasm-bindgen", "wasm-bindgen 0.2.80")

        assert find_system(Application.WASM_BINDGEN) == (script, "0.2.80")

    def test_exact_version_match(self, fake_path):
        script = write_script(fake_path / "wasm-bindgen", "wasm-bindgen 0.2.83 (eb04cf2b1)")

        assert find_system(Application.WASM_BINDGEN, "0.2.83") == (script, "0.2.83")

    def test_version_mismatch(self, fake_path):
        write_script(fake_path / "wasm-bindgen", "wasm-bindgen 0.2.82")

        assert find_system(Application.WASM_BINDGEN, "0.2.83") is None

    def test_no_prefix_matching(self, fake_path):
        """A newer patch release is not accepted for an older pin."""
        write_script(fake_path / "sass", "1.54.90")

        assert find_system(Application.SASS, "1.54.9") is None

    def test_failing_version_check(self, fake_path):
        write_script(fake_path / "wasm-opt", "boom", exit_code=2)

        assert find_system(Application.WASM_OPT, "version_110") is None
