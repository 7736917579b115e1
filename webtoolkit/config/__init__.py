"""Configuration loading for webtoolkit."""

from .parser import DEFAULT_CONFIG_NAME, WebToolkitConfig, load_config, parse_config

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "WebToolkitConfig",
    "load_config",
    "parse_config",
]
