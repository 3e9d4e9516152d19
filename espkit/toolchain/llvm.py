"""
Xtensa LLVM toolchain installation.

The Rust compiler for Xtensa needs libclang from Espressif's LLVM fork. Two
releases exist: a minified one (just what bindgen needs, built per host
triple) and the complete one published by Espressif per OS family.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from espkit.core.directory import ensure_destination_available, get_tool_path
from espkit.core.download import fetch_artifact
from espkit.core.exceptions import InvalidReleaseError
from espkit.core.platform import HostPlatform, detect_host_triple

logger = logging.getLogger(__name__)

DEFAULT_LLVM_COMPLETE_REPOSITORY = (
    "https://github.com/espressif/llvm-project/releases/download"
)
DEFAULT_LLVM_MINIFIED_REPOSITORY = (
    "https://github.com/esp-rs/rust-build/releases/download/"
    "llvm-project-14.0-minified"
)
DEFAULT_LLVM_VERSION = "esp-14.0.0-20220415"

LLVM_COMPONENT = "xtensa-esp32-elf-clang"
LLVM_FILE_PREFIX = "xtensa-esp32-elf-"

_RELEASE_PATTERN = re.compile(r"^[^-]+-(\d+\.\d+\.\d+)-[^-]+$")


def get_release_with_underscores(version: str) -> str:
    """
    Extract the dotted release of an LLVM version and underscore it.

    Args:
        version: Version such as 'esp-14.0.0-20220415'

    Returns:
        Release with dots replaced, e.g. '14_0_0'

    Raises:
        InvalidReleaseError: If version is not '<prefix>-<x.y.z>-<date>'
    """
    match = _RELEASE_PATTERN.match(version)
    if not match:
        raise InvalidReleaseError(
            f"Invalid LLVM version '{version}': expected '<prefix>-<x.y.z>-<suffix>'"
        )
    return match.group(1).replace(".", "_")


class LlvmToolchain:
    """
    Xtensa LLVM release for the host.

    Attributes:
        version: Release version (e.g. 'esp-14.0.0-20220415')
        file_name: Published asset name
        repository_url: Download URL of the asset
        path: Installation directory
    """

    def __init__(
        self,
        minified: bool,
        host: Optional[HostPlatform] = None,
        version: str = DEFAULT_LLVM_VERSION,
        tools_root: Optional[Path] = None,
        allow_overwrite: bool = False,
    ):
        """
        Compute the asset name, URL and destination for the host.

        Args:
            minified: Select the minified release instead of the complete one
            host: Host platform (auto-detected if None)
            version: LLVM release version
            tools_root: Directory containing the LLVM component directory
                (defaults to the Espressif tools directory)
            allow_overwrite: Install over an existing destination

        Raises:
            UnsupportedPlatformError: If no complete release exists for the host
            InvalidReleaseError: If version is malformed
        """
        self.host = host or detect_host_triple()
        self.minified = minified
        self.version = version
        self.allow_overwrite = allow_overwrite

        variant = self.host.triple if minified else self.host.llvm_arch()
        self.file_name = (
            f"{LLVM_FILE_PREFIX}llvm{get_release_with_underscores(version)}"
            f"-{version}-{variant}.{self.host.archive_extension}"
        )

        if minified:
            self.repository_url = f"{DEFAULT_LLVM_MINIFIED_REPOSITORY}/{self.file_name}"
        else:
            self.repository_url = (
                f"{DEFAULT_LLVM_COMPLETE_REPOSITORY}/{version}/{self.file_name}"
            )

        if tools_root is not None:
            component_dir = Path(tools_root) / LLVM_COMPONENT
        else:
            component_dir = get_tool_path(LLVM_COMPONENT)
        self.path = component_dir / f"{version}-{self.host.triple}"

    def get_lib_path(self) -> Path:
        """Directory holding libclang (bin on Windows, lib elsewhere)."""
        subdir = "bin" if self.host.is_windows else "lib"
        return self.path / LLVM_COMPONENT / subdir

    def get_exports(self) -> List[str]:
        """
        Environment statements the user's shell needs to find libclang.

        Returns:
            PowerShell statements on Windows (LIBCLANG_PATH before the PATH
            append), a single POSIX export elsewhere
        """
        lib_path = self.get_lib_path().as_posix()
        if self.host.is_windows:
            return [
                f'$Env:LIBCLANG_PATH="{lib_path}/libclang.dll"',
                f'$Env:PATH+=";{lib_path}"',
            ]
        return [f'export LIBCLANG_PATH="{lib_path}"']

    def install(self) -> List[str]:
        """
        Download and unpack the release into its destination.

        Returns:
            Environment exports, see get_exports()

        Raises:
            InstallationConflictError: If the destination already exists and
                overwriting is disabled
            DownloadError: If the download fails
            ArchiveExtractionError: If the archive cannot be unpacked
        """
        ensure_destination_available(self.path, self.allow_overwrite, "LLVM")

        logger.info("Installing Xtensa elf Clang")
        logger.debug(f"LLVM release: {self.repository_url}")
        fetch_artifact(
            self.repository_url,
            f"idf_tool_xtensa_elf_clang.{self.host.archive_extension}",
            self.path,
            unpack=True,
        )

        return self.get_exports()
