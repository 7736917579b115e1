"""
webtoolkit CLI argument parser.

This module implements the command-line interface for webtoolkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..tools.application import Application

logger = logging.getLogger(__name__)


class CLI:
    """webtoolkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="webtoolkit",
            description="webtoolkit - locate and download web build tools",
            epilog='Use "webtoolkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"webtoolkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./webtoolkit.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_get_command(subparsers)
        self._add_list_command(subparsers)
        self._add_cache_dir_command(subparsers)

        return parser

    def _add_get_command(self, subparsers):
        """Add 'get' subcommand."""
        parser = subparsers.add_parser(
            "get",
            help="Locate a tool, downloading it if missing",
            description="Print the path of a runnable tool executable, "
            "downloading and installing the release if needed",
        )
        parser.add_argument(
            "tool",
            choices=[app.value for app in Application],
            help="Tool to locate",
        )
        parser.add_argument(
            "--tool-version",
            metavar="VERSION",
            help="Required tool version (default: pinned or built-in default)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Cache root for downloaded tools",
        )

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        subparsers.add_parser(
            "list",
            help="List supported tools",
            description="List supported tools with their versions and download URLs",
        )

    def _add_cache_dir_command(self, subparsers):
        """Add 'cache-dir' subcommand."""
        parser = subparsers.add_parser(
            "cache-dir",
            help="Print the cache root",
            description="Print the directory downloaded tools are installed into",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Cache root override",
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "get": "webtoolkit.cli.commands.get",
            "list": "webtoolkit.cli.commands.list_tools",
            "cache-dir": "webtoolkit.cli.commands.cache_dir",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
