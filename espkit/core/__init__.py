"""
Core functionality for espkit.

This package contains the host platform table, directory layout, download,
archive and process helpers the installers depend on.
"""

from .platform import (
    HostPlatform,
    KNOWN_HOSTS,
    detect_host_triple,
    get_artifact_extension,
    get_installer,
    clear_host_cache,
)

from .directory import (
    get_espressif_home,
    get_tool_path,
    get_dist_path,
    get_rustup_home,
    get_cargo_home,
    ensure_destination_available,
)

from .exceptions import (
    EspkitError,
    UnsupportedPlatformError,
    InstallationError,
    InstallationConflictError,
    InvalidReleaseError,
    CommandError,
)

__all__ = [
    "HostPlatform",
    "KNOWN_HOSTS",
    "detect_host_triple",
    "get_artifact_extension",
    "get_installer",
    "clear_host_cache",
    "get_espressif_home",
    "get_tool_path",
    "get_dist_path",
    "get_rustup_home",
    "get_cargo_home",
    "ensure_destination_available",
    "EspkitError",
    "UnsupportedPlatformError",
    "InstallationError",
    "InstallationConflictError",
    "InvalidReleaseError",
    "CommandError",
]
