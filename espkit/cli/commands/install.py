"""
Install command implementation.

Resolves installation options from the configuration file and the command
line, runs the installer and prints the exports the user has to apply.
"""

import logging
from pathlib import Path

from espkit.config import DEFAULT_CONFIG_FILE, load_yaml_config, options_from_config
from espkit.installer import Installer
from espkit.toolchain.targets import parse_targets

logger = logging.getLogger(__name__)


def _split(value):
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def build_options(args):
    """
    Merge the configuration file and command-line flags into InstallOptions.

    Raises:
        FileNotFoundError: If --config names a missing file
        ValueError: If the configuration or a target name is invalid
    """
    if args.config:
        config = load_yaml_config(Path(args.config), required=True)
    else:
        config = load_yaml_config(Path.cwd() / DEFAULT_CONFIG_FILE)

    overrides = {
        "targets": parse_targets(args.targets) if args.targets else None,
        "toolchain_version": args.toolchain_version,
        "nightly_version": args.nightly_version,
        "extra_crates": _split(args.extra_crates),
        "llvm_minified": args.llvm_minified,
        "toolchain_destination": args.toolchain_destination,
        "export_file": args.export_file,
    }
    return options_from_config(config, overrides)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    options = build_options(args)
    logger.debug(f"Install options: {options}")

    exports = Installer(options).run()

    if exports and options.export_file is None:
        print("Apply the following to your shell environment:")
        for line in exports:
            print(f"  {line}")

    return 0
