"""
Entry point for running the webtoolkit CLI as a module.

Usage: python -m webtoolkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
