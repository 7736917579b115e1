"""YAML configuration parser for webtoolkit.

This module provides parsing and validation for webtoolkit.yaml files:

    version: 1
    cache_dir: .cache/tools
    download_timeout: 60
    tools:
      sass: "1.54.9"
      wasm-opt: version_110
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from ..core.download import DEFAULT_TIMEOUT
from ..core.exceptions import ConfigError
from ..tools.application import Application

DEFAULT_CONFIG_NAME = "webtoolkit.yaml"


@dataclass
class WebToolkitConfig:
    """Complete webtoolkit configuration."""

    version: int = 1
    cache_dir: Optional[Path] = None
    download_timeout: int = DEFAULT_TIMEOUT
    tools: Dict[Application, str] = field(default_factory=dict)

    def tool_version(self, app: Application) -> Optional[str]:
        """Pinned version of a tool, or None to use its default."""
        return self.tools.get(app)


def parse_config(config_path: Path) -> WebToolkitConfig:
    """
    Parse webtoolkit.yaml configuration file.

    Args:
        config_path: Path to webtoolkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data, config_path.parent)


def load_config(
    config_path: Optional[Path] = None, search_dir: Optional[Path] = None
) -> WebToolkitConfig:
    """
    Load configuration from an explicit file or the default location.

    Args:
        config_path: Explicit file; must exist if given
        search_dir: Directory searched for webtoolkit.yaml (cwd if None)

    Returns:
        Parsed configuration, or defaults if no file was found
    """
    if config_path is not None:
        return parse_config(config_path)

    default = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
    if default.exists():
        return parse_config(default)
    return WebToolkitConfig()


def _parse_and_validate(data: dict, base_dir: Path) -> WebToolkitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    cache_dir = None
    if data.get("cache_dir") is not None:
        if not isinstance(data["cache_dir"], str):
            raise ConfigError("cache_dir must be a string")
        cache_dir = Path(data["cache_dir"]).expanduser()
        if not cache_dir.is_absolute():
            cache_dir = base_dir / cache_dir

    timeout = data.get("download_timeout", DEFAULT_TIMEOUT)
    if not isinstance(timeout, int) or isinstance(timeout, bool) or timeout <= 0:
        raise ConfigError(
            f"download_timeout must be a positive integer, got {timeout!r}"
        )

    return WebToolkitConfig(
        version=version,
        cache_dir=cache_dir,
        download_timeout=timeout,
        tools=_parse_tools(data.get("tools") or {}),
    )


def _parse_tools(data) -> Dict[Application, str]:
    """Parse the tool name -> version mapping."""
    if not isinstance(data, dict):
        raise ConfigError("tools must be a mapping of tool name to version")

    tools = {}
    for name, version in data.items():
        try:
            app = Application.from_name(str(name))
        except ValueError as e:
            raise ConfigError(str(e))

        if not isinstance(version, str) or not version:
            raise ConfigError(
                f"Version of {name} must be a non-empty string, got {version!r}"
            )
        tools[app] = version

    return tools


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "WebToolkitConfig",
    "parse_config",
    "load_config",
]
