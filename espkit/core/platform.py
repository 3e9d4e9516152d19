"""
Host platform detection for espkit.

This module maps the machine running the installer to one of a closed set of
host triples (e.g. 'x86_64-unknown-linux-gnu', 'aarch64-apple-darwin') and
exposes the artifact shape every installer derives from it.

Features:
- Host triple detection from the running interpreter (cached per process)
- Single lookup table for archive extension, installer script and LLVM
  OS bucket, shared by the Rust and LLVM installers
- Explicit error for host triples outside the table

Usage:
    from espkit.core.platform import detect_host_triple

    host = detect_host_triple()
    print(f"Host: {host.triple}")
    print(f"Archives: {host.archive_extension}")
"""

import functools
import platform
from dataclasses import dataclass
from typing import Optional

from espkit.core.exceptions import UnsupportedPlatformError

INSTALLER_SCRIPT = "./install.sh"


@dataclass(frozen=True)
class HostPlatform:
    """
    Artifact shape of a known host triple.

    Attributes:
        triple: Host triple (e.g. 'x86_64-pc-windows-msvc')
        os: Operating system ('windows', 'linux', 'macos')
        arch: CPU architecture ('x86_64', 'aarch64')
        archive_extension: Extension of published archives ('zip', 'tar.xz')
        installer: Installer script bundled in the archives, empty if none
        llvm_os: OS bucket used by complete LLVM releases, None if not published
    """

    triple: str
    os: str
    arch: str
    archive_extension: str
    installer: str
    llvm_os: Optional[str]

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def has_installer(self) -> bool:
        return bool(self.installer)

    def llvm_arch(self) -> str:
        """
        Get the OS bucket used in complete LLVM release names.

        Returns:
            One of 'macos', 'linux-amd64', 'win64'

        Raises:
            UnsupportedPlatformError: If no complete LLVM release exists for the host

        Example:
            >>> HostPlatform.from_triple("aarch64-apple-darwin").llvm_arch()
            'macos'
        """
        if self.llvm_os is None:
            raise UnsupportedPlatformError(
                self.triple, "no LLVM arch found for the host triple"
            )
        return self.llvm_os

    @classmethod
    def from_triple(cls, triple: str) -> "HostPlatform":
        """
        Look up a host triple in the known platform table.

        Args:
            triple: Host triple string

        Returns:
            HostPlatform for the triple

        Raises:
            UnsupportedPlatformError: If the triple is not a known host
        """
        try:
            return KNOWN_HOSTS[triple]
        except KeyError:
            raise UnsupportedPlatformError(triple) from None

    def __str__(self) -> str:
        return self.triple


def _windows(triple: str) -> HostPlatform:
    return HostPlatform(triple, "windows", "x86_64", "zip", "", "win64")


def _unix(triple: str, os_name: str, arch: str, llvm_os: Optional[str]) -> HostPlatform:
    return HostPlatform(triple, os_name, arch, "tar.xz", INSTALLER_SCRIPT, llvm_os)


KNOWN_HOSTS = {
    host.triple: host
    for host in (
        _windows("x86_64-pc-windows-msvc"),
        _windows("x86_64-pc-windows-gnu"),
        _unix("x86_64-unknown-linux-gnu", "linux", "x86_64", "linux-amd64"),
        _unix("aarch64-unknown-linux-gnu", "linux", "aarch64", None),
        _unix("x86_64-apple-darwin", "macos", "x86_64", "macos"),
        _unix("aarch64-apple-darwin", "macos", "aarch64", "macos"),
    )
}


def get_artifact_extension(host_triple: str) -> str:
    """
    Get the archive extension published for a host triple.

    Example:
        >>> get_artifact_extension("x86_64-pc-windows-gnu")
        'zip'
    """
    return HostPlatform.from_triple(host_triple).archive_extension


def get_installer(host_triple: str) -> str:
    """
    Get the installer script bundled for a host triple.

    Returns:
        Script path, or an empty string when archives are unpacked in place
    """
    return HostPlatform.from_triple(host_triple).installer


@functools.lru_cache(maxsize=1)
def detect_host_triple() -> HostPlatform:
    """
    Detect the host triple of the running machine.

    This function is cached - it only runs detection once per process.

    Returns:
        HostPlatform of the running machine

    Raises:
        UnsupportedPlatformError: If the OS/architecture pair is not a known host
    """
    triple = f"{_detect_architecture()}-{_detect_os_suffix()}"
    return HostPlatform.from_triple(triple)


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x86_64', 'aarch64', or the raw machine name
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "aarch64"
    return machine


def _detect_os_suffix() -> str:
    """
    Detect the vendor/OS/ABI part of the host triple.

    Returns:
        Triple suffix such as 'unknown-linux-gnu' or 'apple-darwin'
    """
    system = platform.system().lower()

    if system == "windows":
        # MinGW builds of CPython report a GCC compiler
        if "gcc" in platform.python_compiler().lower():
            return "pc-windows-gnu"
        return "pc-windows-msvc"
    elif system == "linux":
        return "unknown-linux-gnu"
    elif system == "darwin":
        return "apple-darwin"
    return system


def clear_host_cache():
    """
    Clear the host detection cache.

    This forces the next call to detect_host_triple() to re-detect.
    """
    detect_host_triple.cache_clear()


__all__ = [
    "HostPlatform",
    "KNOWN_HOSTS",
    "INSTALLER_SCRIPT",
    "get_artifact_extension",
    "get_installer",
    "detect_host_triple",
    "clear_host_cache",
]
