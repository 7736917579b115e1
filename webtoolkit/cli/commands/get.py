"""
Get command implementation.

Locates a tool, downloading and installing it if missing, and prints the path
of the executable on stdout.
"""

import logging

from webtoolkit.config import load_config
from webtoolkit.tools.application import Application
from webtoolkit.tools.cache import InstallCache
from webtoolkit.tools.resolver import get

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the get command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args.config)
    app = Application.from_name(args.tool)

    version = args.tool_version or config.tool_version(app)
    cache_dir = args.cache_dir or config.cache_dir
    logger.debug(f"Resolving {app} version={version} cache_dir={cache_dir}")

    path = get(
        app,
        version,
        cache_dir=cache_dir,
        cache=InstallCache(timeout=config.download_timeout),
    )

    print(path)
    return 0
