"""
Cache-dir command implementation.

Prints the cache root downloaded tools are installed into.
"""

from webtoolkit.config import load_config
from webtoolkit.core.directory import get_cache_dir


def run(args) -> int:
    """
    Run the cache-dir command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_config(args.config)
    print(get_cache_dir(args.cache_dir or config.cache_dir))
    return 0
