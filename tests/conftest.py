"""
Pytest configuration and shared fixtures for espkit tests.
"""

import pytest
from pathlib import Path

from espkit.config import InstallOptions
from espkit.core.platform import HostPlatform


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point every storage root at a temporary directory."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    monkeypatch.setenv("IDF_TOOLS_PATH", str(fake_home / ".espressif"))
    monkeypatch.setenv("RUSTUP_HOME", str(fake_home / ".rustup"))
    monkeypatch.setenv("CARGO_HOME", str(fake_home / ".cargo"))

    return fake_home


@pytest.fixture
def linux_host() -> HostPlatform:
    return HostPlatform.from_triple("x86_64-unknown-linux-gnu")


@pytest.fixture
def windows_host() -> HostPlatform:
    return HostPlatform.from_triple("x86_64-pc-windows-msvc")


@pytest.fixture
def macos_host() -> HostPlatform:
    return HostPlatform.from_triple("aarch64-apple-darwin")


@pytest.fixture
def install_options(isolated_home: Path) -> InstallOptions:
    """Options with all paths under the isolated home."""
    return InstallOptions(
        toolchain_version="1.62.1.0",
        extra_crates=["ldproxy"],
        toolchain_destination=isolated_home / ".rustup" / "toolchains" / "esp",
    )
