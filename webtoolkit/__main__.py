"""
Entry point for running webtoolkit CLI as a module.

Usage: python -m webtoolkit [command] [options]
"""

from webtoolkit.cli.parser import main

if __name__ == "__main__":
    main()
