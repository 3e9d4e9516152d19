"""
espkit CLI argument parser.

This module implements the command-line interface for espkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from espkit.core.exceptions import EspkitError

try:
    from importlib.metadata import version

    __version__ = version("espkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """espkit command-line interface."""

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
            prog="espkit",
            description="espkit - Rust toolchains for Espressif chips",
            epilog='Use "espkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"espkit {__version__}"
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
            help="Path to configuration file (default: ./espkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_platform_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install the Rust toolchains",
            description="Install the Xtensa Rust toolchain, LLVM and RISC-V targets",
        )
        parser.add_argument(
            "--targets",
            "-t",
            metavar="CHIPS",
            help="Comma separated chips (esp32, esp32s2, esp32s3, esp32c3) or 'all'",
        )
        parser.add_argument(
            "--toolchain-version",
            metavar="VERSION",
            help="Xtensa Rust toolchain version (e.g., 1.62.1.0)",
        )
        parser.add_argument(
            "--nightly-version",
            metavar="NAME",
            help="Nightly rustup toolchain name (default: nightly)",
        )
        parser.add_argument(
            "--extra-crates",
            metavar="CRATES",
            help="Comma separated crates to install with cargo",
        )
        llvm_group = parser.add_mutually_exclusive_group()
        llvm_group.add_argument(
            "--llvm-minified",
            dest="llvm_minified",
            action="store_true",
            default=None,
            help="Install the minified LLVM release (default)",
        )
        llvm_group.add_argument(
            "--llvm-complete",
            dest="llvm_minified",
            action="store_false",
            help="Install the complete LLVM release",
        )
        parser.add_argument(
            "--toolchain-destination",
            type=Path,
            metavar="DIR",
            help="Xtensa Rust toolchain destination (default: <rustup home>/toolchains/esp)",
        )
        parser.add_argument(
            "--export-file",
            type=Path,
            metavar="PATH",
            help="Write environment exports to this file",
        )

    def _add_platform_command(self, subparsers):
        """Add 'platform' subcommand."""
        subparsers.add_parser(
            "platform",
            help="Show host platform",
            description="Show the detected host triple and its artifact shape",
        )

    def parse_args(self, args: Optional[List[str]] = None):
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

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except (EspkitError, ValueError, FileNotFoundError) as e:
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
            "install": "espkit.cli.commands.install",
            "platform": "espkit.cli.commands.platform",
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
