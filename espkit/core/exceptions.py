"""
Centralized exception hierarchy for espkit.

This module defines the custom exceptions shared by the installers so that
the CLI can report every installation failure through one base class.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class EspkitError(Exception):
    """Base exception for all espkit errors."""

    pass


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedPlatformError(EspkitError):
    """Raised when the host triple has no artifact for the requested component."""

    def __init__(self, host_triple: str, detail: str = ""):
        self.host_triple = host_triple
        msg = f"Unsupported host triple: {host_triple}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallationError(EspkitError):
    """Base exception for installation errors."""

    pass


class InstallationConflictError(InstallationError):
    """Raised when the destination already holds a previous installation."""

    def __init__(self, component: str, path):
        self.component = component
        self.path = path
        super().__init__(
            f"Previous installation of {component} exists in: {path}\n"
            "Please, remove the directory before new installation."
        )


class InvalidReleaseError(InstallationError, ValueError):
    """Raised when a release version string does not have the expected shape."""

    pass


class CommandError(InstallationError):
    """Raised when an external program fails or cannot be started."""

    def __init__(self, command: str, returncode=None, reason: str = ""):
        self.command = command
        self.returncode = returncode
        if returncode is not None:
            msg = f"Command '{command}' failed with exit code {returncode}"
        else:
            msg = f"Command '{command}' could not be run"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
