"""
Directory layout for espkit.

This module resolves where toolchains are staged and installed. It provides
cross-platform path resolution and the destination precondition check shared
by every installer.

Directory Structure:
    Espressif home (~/.espressif/ or $IDF_TOOLS_PATH):
        - dist/<name>/    : Staging area for downloaded distributions
        - tools/<name>/   : Installed tools (e.g. xtensa-esp32-elf-clang)

    Rustup home (~/.rustup/ or $RUSTUP_HOME):
        - toolchains/esp/ : Default destination of the Xtensa Rust toolchain
"""

import logging
import os
from pathlib import Path
from typing import Union

from espkit.core.exceptions import InstallationConflictError

logger = logging.getLogger(__name__)


def _home_from_env(variable: str, default_name: str) -> Path:
    value = os.environ.get(variable)
    if value:
        return Path(value)
    return Path.home() / default_name


def get_espressif_home() -> Path:
    """
    Get the root directory for Espressif tools.

    Returns:
        Path: $IDF_TOOLS_PATH if set, otherwise ~/.espressif

    Example:
        >>> print(get_espressif_home())
        /home/user/.espressif  # on Linux
    """
    return _home_from_env("IDF_TOOLS_PATH", ".espressif")


def get_tool_path(name: str) -> Path:
    """
    Get the installation directory of a tool.

    Example:
        >>> get_tool_path("xtensa-esp32-elf-clang")
        PosixPath('/home/user/.espressif/tools/xtensa-esp32-elf-clang')
    """
    return get_espressif_home() / "tools" / name


def get_dist_path(name: str) -> Path:
    """Get the staging directory of a downloaded distribution."""
    return get_espressif_home() / "dist" / name


def get_rustup_home() -> Path:
    """Get the rustup home directory ($RUSTUP_HOME or ~/.rustup)."""
    return _home_from_env("RUSTUP_HOME", ".rustup")


def get_cargo_home() -> Path:
    """Get the cargo home directory ($CARGO_HOME or ~/.cargo)."""
    return _home_from_env("CARGO_HOME", ".cargo")


def ensure_destination_available(
    path: Union[str, Path], allow_overwrite: bool, component: str
) -> None:
    """
    Check that an installation destination may be written.

    Args:
        path: Destination directory of the installation
        allow_overwrite: If True, an existing destination is installed over
        component: Component name used in the error message

    Raises:
        InstallationConflictError: If the destination exists and overwriting
            is not allowed
    """
    path = Path(path)
    if not path.exists():
        return

    if not allow_overwrite:
        raise InstallationConflictError(component, path)

    logger.debug(f"Installing {component} over existing directory: {path}")


__all__ = [
    "get_espressif_home",
    "get_tool_path",
    "get_dist_path",
    "get_rustup_home",
    "get_cargo_home",
    "ensure_destination_available",
]
