"""
List command implementation.

Shows the supported tools, the version that would be installed and the
download URL for the current platform.
"""

import logging

from webtoolkit.config import load_config
from webtoolkit.core.exceptions import UnsupportedPlatformError
from webtoolkit.core.platform import detect_platform
from webtoolkit.tools.application import Application

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args.config)
    platform = detect_platform()

    print(f"Supported tools ({platform}):")
    for app in Application:
        pinned = config.tool_version(app)
        version = pinned or app.default_version
        source = "pinned" if pinned else "default"

        try:
            url = app.url(version, platform)
        except UnsupportedPlatformError as e:
            logger.debug(str(e))
            url = "(no release for this platform)"

        print(f"  {app.executable_name:<14} {version:<14} [{source}]  {url}")

    return 0
